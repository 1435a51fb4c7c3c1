from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.urls import reverse
from rest_framework.test import APITestCase

from reviewdesk.reviews.factories import ReviewFactory
from reviewdesk.reviews.models import ReviewSelectionLog
from reviewdesk.reviews.throttling import ScopedRateThrottleIsolated


class ReviewApproveApiTests(APITestCase):
    def setUp(self):
        self.url = reverse("reviews:review-approve")
        self.review = ReviewFactory()

    def _post(self, payload):
        return self.client.post(self.url, payload, format="json")

    def test_approve(self):
        r = self._post({"reviewId": self.review.id, "approved": True})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"status": "success", "data": {"reviewId": self.review.id, "approved": True}})

        self.review.refresh_from_db()
        self.assertTrue(self.review.approved)
        log = ReviewSelectionLog.objects.get(review=self.review)
        self.assertEqual(log.action, ReviewSelectionLog.APPROVED)
        self.assertEqual(log.actor, "admin")

    def test_unapprove(self):
        self._post({"reviewId": self.review.id, "approved": True})
        r = self._post({"reviewId": self.review.id, "approved": False})
        self.assertEqual(r.status_code, 200)

        self.review.refresh_from_db()
        self.assertFalse(self.review.approved)
        actions = list(
            ReviewSelectionLog.objects.filter(review=self.review).order_by("id").values_list("action", flat=True)
        )
        self.assertEqual(actions, ["approved", "unapproved"])

    def test_repeated_approval_is_logged_each_time(self):
        self._post({"reviewId": self.review.id, "approved": True})
        self._post({"reviewId": self.review.id, "approved": True})
        self.assertEqual(ReviewSelectionLog.objects.filter(review=self.review).count(), 2)

    def test_authenticated_user_is_the_actor(self):
        user = get_user_model().objects.create_user(username="manager", password="x")
        self.client.force_authenticate(user)
        self._post({"reviewId": self.review.id, "approved": True})
        self.assertEqual(ReviewSelectionLog.objects.get().actor, "manager")

    def test_missing_review_is_404_and_not_logged(self):
        r = self._post({"reviewId": self.review.id + 1000, "approved": True})
        self.assertEqual(r.status_code, 404)
        body = r.json()
        self.assertEqual(body["status"], "error")
        self.assertEqual(body["error"], "Review not found")
        self.assertFalse(ReviewSelectionLog.objects.exists())

    def test_invalid_body_is_400(self):
        for payload in ({}, {"reviewId": self.review.id}, {"reviewId": "abc", "approved": True},
                        {"reviewId": self.review.id, "approved": "maybe"}):
            r = self._post(payload)
            self.assertEqual(r.status_code, 400, payload)
            self.assertEqual(r.json()["status"], "error")
        self.assertFalse(ReviewSelectionLog.objects.exists())

    def test_approve_is_throttled(self):
        with patch.object(ScopedRateThrottleIsolated, "THROTTLE_RATES", {"reviews_approve": "2/min"}):
            r1 = self._post({"reviewId": self.review.id, "approved": True})
            r2 = self._post({"reviewId": self.review.id, "approved": True})
            r3 = self._post({"reviewId": self.review.id, "approved": True})
        self.assertEqual([r1.status_code, r2.status_code, r3.status_code], [200, 200, 429])
        self.assertEqual(ReviewSelectionLog.objects.count(), 2)

    def test_oversized_review_id_is_400(self):
        r = self._post({"reviewId": 2 ** 70, "approved": True})
        self.assertEqual(r.status_code, 400)

    def test_failed_log_write_rolls_back_approval(self):
        with patch.object(ReviewSelectionLog.objects, "create", side_effect=DatabaseError("disk full")):
            r = self._post({"reviewId": self.review.id, "approved": True})

        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"status": "error", "error": "Database error", "message": "disk full"})
        self.review.refresh_from_db()
        self.assertFalse(self.review.approved)
        self.assertFalse(ReviewSelectionLog.objects.exists())
