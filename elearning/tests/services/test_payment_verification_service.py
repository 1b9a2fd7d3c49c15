"""
Tests für den PaymentVerificationService

Ablehnungen antworten mit 200 und ändern nichts; ein Fehler nach der
Signaturprüfung antwortet mit 500 und hinterlässt keinen Zustand.
"""

from unittest.mock import patch

from django.contrib.auth.models import User
from django.db import DatabaseError
from django.test import TestCase, override_settings

from core.payment_gateway import compute_payment_signature
from elearning.courses.models import Course, CourseProgress
from elearning.services.enrollment import EnrollmentService
from elearning.services.payments import PaymentVerificationService, VerificationState

SECRET = "test_secret"


@override_settings(RAZORPAY_SECRET=SECRET)
class PaymentVerificationServiceTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(
            username="Erika", password="Musterpassword", email="erika@test.com"
        )
        cls.python = Course.objects.create(course_name="Python", price="499.00")
        cls.django = Course.objects.create(course_name="Django", price="999.00")

    def confirmation(self, **overrides):
        data = {
            "order_id": "order_1",
            "payment_id": "pay_1",
            "signature": compute_payment_signature("order_1", "pay_1", SECRET),
            "course_ids": [self.python.pk, self.django.pk],
            "user_id": self.user.pk,
        }
        data.update(overrides)
        return data

    def test_verified_payment_enrolls_user(self):
        outcome = PaymentVerificationService().verify_and_enroll(**self.confirmation())

        self.assertEqual(outcome.state, VerificationState.RESPONDED)
        self.assertEqual(outcome.http_status, 200)
        self.assertTrue(outcome.success)
        self.assertEqual(outcome.body["message"], "Payment verified and course enrollment successful")
        self.assertEqual(outcome.body["user"]["id"], self.user.pk)
        self.assertCountEqual(
            [course["course_name"] for course in outcome.body["courses"]], ["Python", "Django"]
        )
        self.assertEqual(len(outcome.body["courseProgress"]), 2)
        self.assertEqual(
            [entry["status"] for entry in outcome.body["enrollments"]], ["enrolled", "enrolled"]
        )
        self.assertTrue(self.python.is_enrolled(self.user))
        self.assertTrue(self.django.is_enrolled(self.user))

    def test_missing_fields_are_rejected_with_200(self):
        for field, value in [
            ("order_id", None),
            ("payment_id", ""),
            ("signature", None),
            ("course_ids", []),
            ("user_id", None),
        ]:
            with self.subTest(field=field):
                outcome = PaymentVerificationService().verify_and_enroll(
                    **self.confirmation(**{field: value})
                )
                self.assertEqual(outcome.state, VerificationState.REJECTED_MISSING_FIELDS)
                self.assertEqual(outcome.http_status, 200)
                self.assertEqual(
                    outcome.body,
                    {"success": False, "message": "Payment Failed: Missing required fields"},
                )

        self.assertFalse(CourseProgress.objects.exists())

    def test_bad_signature_is_rejected_with_200(self):
        with self.assertLogs("elearning.services.payments.payment_verification_service", level="WARNING"):
            outcome = PaymentVerificationService().verify_and_enroll(
                **self.confirmation(signature="0" * 64)
            )

        self.assertEqual(outcome.state, VerificationState.REJECTED_BAD_SIGNATURE)
        self.assertEqual(outcome.http_status, 200)
        self.assertEqual(outcome.body, {"success": False, "message": "Payment Failed: Invalid signature"})
        self.assertFalse(self.python.is_enrolled(self.user))

    def test_unencodable_order_id_is_rejected_with_200(self):
        outcome = PaymentVerificationService().verify_and_enroll(
            **self.confirmation(order_id="order_\ud800")
        )

        self.assertEqual(outcome.state, VerificationState.REJECTED_BAD_SIGNATURE)
        self.assertEqual(outcome.http_status, 200)
        self.assertEqual(outcome.body, {"success": False, "message": "Payment Failed: Invalid signature"})
        self.assertFalse(CourseProgress.objects.exists())

    @override_settings(RAZORPAY_SECRET="")
    def test_unconfigured_secret_rejects_every_signature(self):
        outcome = PaymentVerificationService().verify_and_enroll(
            **self.confirmation(signature=compute_payment_signature("order_1", "pay_1", ""))
        )

        self.assertEqual(outcome.state, VerificationState.REJECTED_BAD_SIGNATURE)
        self.assertFalse(CourseProgress.objects.exists())

    def test_enrollment_failure_answers_500_and_leaves_no_state(self):
        django_pk = self.django.pk

        def flaky(service, course, user, scope):
            if course.pk == django_pk:
                raise DatabaseError("disk full")
            return CourseProgress.objects.using(scope.using).create(
                course=course, user=user, completed_lectures=[]
            )

        with patch.object(EnrollmentService, "_create_progress", autospec=True, side_effect=flaky):
            outcome = PaymentVerificationService().verify_and_enroll(**self.confirmation())

        self.assertEqual(outcome.state, VerificationState.ENROLLMENT_FAILED)
        self.assertEqual(outcome.http_status, 500)
        self.assertFalse(outcome.success)
        self.assertEqual(outcome.body["message"], "Payment verification succeeded but enrollment failed")
        self.assertIn("error", outcome.body)
        self.assertNotIn("stack", outcome.body)

        self.assertFalse(self.python.is_enrolled(self.user))
        self.assertFalse(self.django.is_enrolled(self.user))
        self.assertFalse(CourseProgress.objects.exists())
        self.assertFalse(self.user.profile.courses.exists())

    @override_settings(DEBUG=True)
    def test_enrollment_failure_includes_stack_in_debug(self):
        outcome = PaymentVerificationService().verify_and_enroll(**self.confirmation(user_id=424242))

        self.assertEqual(outcome.http_status, 500)
        self.assertIn("stack", outcome.body)
        self.assertIn("NotFoundError", outcome.body["stack"])

    def test_unknown_user_after_valid_signature_answers_500(self):
        outcome = PaymentVerificationService().verify_and_enroll(**self.confirmation(user_id=424242))

        self.assertEqual(outcome.state, VerificationState.ENROLLMENT_FAILED)
        self.assertEqual(outcome.http_status, 500)

    def test_repeated_confirmation_does_not_duplicate_progress(self):
        PaymentVerificationService().verify_and_enroll(**self.confirmation())
        outcome = PaymentVerificationService().verify_and_enroll(**self.confirmation())

        self.assertEqual(outcome.state, VerificationState.RESPONDED)
        self.assertEqual(
            [entry["status"] for entry in outcome.body["enrollments"]],
            ["already_enrolled", "already_enrolled"],
        )
        self.assertEqual(CourseProgress.objects.filter(user=self.user).count(), 2)

    def test_skipped_courses_do_not_fail_verification(self):
        outcome = PaymentVerificationService().verify_and_enroll(
            **self.confirmation(course_ids=[99999, self.python.pk])
        )

        self.assertEqual(outcome.state, VerificationState.RESPONDED)
        self.assertEqual(
            [entry["status"] for entry in outcome.body["enrollments"]], ["not_found", "enrolled"]
        )
