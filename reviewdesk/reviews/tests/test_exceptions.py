from django.db import DatabaseError
from rest_framework.exceptions import NotFound

from reviewdesk.reviews.exceptions import ReviewNotFound, envelope_exception_handler


class TestEnvelopeExceptionHandler:

    def test_not_found(self):
        response = envelope_exception_handler(ReviewNotFound(), {})
        assert response.status_code == 404
        assert response.data["status"] == "error"
        assert response.data["error"] == "Review not found"

    def test_generic_not_found_keeps_detail(self):
        response = envelope_exception_handler(NotFound("Gone"), {})
        assert response.data["error"] == "Gone"

    def test_database_error_is_500(self):
        response = envelope_exception_handler(DatabaseError("database is locked"), {})
        assert response.status_code == 500
        assert response.data == {
            "status": "error", "error": "Database error", "message": "database is locked",
        }

    def test_other_exceptions_are_not_handled(self):
        assert envelope_exception_handler(RuntimeError("boom"), {}) is None
