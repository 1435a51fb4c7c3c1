import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ReviewNotFound(NotFound):
    default_detail = "Review not found"
    default_code = "review_not_found"


class ListingNotFound(NotFound):
    default_detail = "Listing not found"
    default_code = "listing_not_found"


class HostawaySchemaError(ValidationError):
    """A raw Hostaway record does not match the expected schema."""
    default_detail = "Invalid Hostaway review payload"
    default_code = "hostaway_schema"


class HostawayUnavailable(Exception):
    """
    The Hostaway API could not deliver reviews (network error, bad status,
    unreadable body or an empty result). Recovered by the local dataset,
    never surfaced to API callers.
    """


def _summary(exc):
    if isinstance(exc, NotFound):
        return str(exc.detail)
    if isinstance(exc, ValidationError):
        return "Validation error"
    return "Request failed"


def envelope_exception_handler(exc, context):
    """
    Render every error as {"status": "error", "error": ..., "message": ...}.
    Database failures become a 500 carrying the underlying message.
    """
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, DatabaseError):
            logger.exception("persistence failure: %s", exc)
            return Response(
                {"status": "error", "error": "Database error", "message": str(exc)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return None

    if isinstance(exc, APIException):
        response.data = {
            "status": "error",
            "error": _summary(exc),
            "message": exc.detail,
        }
    return response
