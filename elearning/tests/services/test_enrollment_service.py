"""
Tests für den EnrollmentService

Prüft Einschreibung, Idempotenz, das Überspringen ungültiger Kurse,
Atomarität bei Schreibfehlern und die Benachrichtigungen nach Commit.
"""

import threading
from unittest.mock import Mock, patch

from django.contrib.auth.models import User
from django.core import mail
from django.db import DatabaseError, connection
from django.test import TestCase, TransactionTestCase, skipUnlessDBFeature

from elearning.courses.models import Course, CourseProgress
from elearning.exceptions import DeliveryError, NotFoundError, PersistenceError
from elearning.services.database import TransactionScope
from elearning.services.enrollment import CourseOutcomeStatus, EnrollmentService


class EnrollmentServiceTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(
            username="Max",
            password="Musterpassword",
            email="max@test.com",
            first_name="Max",
            last_name="Mustermann",
        )
        cls.python = Course.objects.create(course_name="Python", price="499.00")
        cls.django = Course.objects.create(course_name="Django", price="999.00")

    def enroll(self, course_ids, user_id=None, service=None):
        service = service or EnrollmentService()
        with TransactionScope() as scope:
            result = service.enroll(course_ids, user_id or self.user.pk, scope)
            scope.commit()
        return result

    def test_enroll_into_new_courses(self):
        result = self.enroll([self.python.pk, self.django.pk])

        self.assertTrue(result.success)
        self.assertEqual(
            [outcome.status for outcome in result.outcomes],
            [CourseOutcomeStatus.ENROLLED, CourseOutcomeStatus.ENROLLED],
        )
        self.assertTrue(self.python.is_enrolled(self.user))
        self.assertTrue(self.django.is_enrolled(self.user))

        profile = self.user.profile
        self.assertCountEqual(profile.courses.all(), [self.python, self.django])
        progress = CourseProgress.objects.filter(user=self.user)
        self.assertEqual(progress.count(), 2)
        self.assertCountEqual(profile.course_progress.all(), list(progress))
        self.assertTrue(all(record.completed_lectures == [] for record in progress))

    def test_enrollment_is_idempotent(self):
        self.enroll([self.python.pk])
        result = self.enroll([self.python.pk])

        self.assertTrue(result.success)
        self.assertEqual(result.outcomes[0].status, CourseOutcomeStatus.ALREADY_ENROLLED)
        self.assertEqual(CourseProgress.objects.filter(user=self.user, course=self.python).count(), 1)
        self.assertEqual(self.python.students_enrolled.filter(pk=self.user.pk).count(), 1)

    def test_invalid_and_unknown_courses_are_skipped(self):
        result = self.enroll(["abc", 99999, self.python.pk])

        self.assertTrue(result.success)
        self.assertEqual(
            [outcome.status for outcome in result.outcomes],
            [
                CourseOutcomeStatus.INVALID_ID,
                CourseOutcomeStatus.NOT_FOUND,
                CourseOutcomeStatus.ENROLLED,
            ],
        )
        self.assertEqual(result.enrolled_course_ids, [self.python.pk])
        self.assertEqual(CourseProgress.objects.filter(user=self.user).count(), 1)

    def test_string_and_single_identifiers_are_accepted(self):
        result = self.enroll(str(self.python.pk))

        self.assertEqual(len(result.outcomes), 1)
        self.assertEqual(result.outcomes[0].status, CourseOutcomeStatus.ENROLLED)
        self.assertEqual(result.outcomes[0].as_dict()["status"], "enrolled")

    def test_unknown_user_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            self.enroll([self.python.pk], user_id=424242)
        with self.assertRaises(NotFoundError):
            self.enroll([self.python.pk], user_id="not-a-user")

        self.assertFalse(CourseProgress.objects.exists())

    def test_failed_write_rolls_back_every_course(self):
        django_pk = self.django.pk

        def flaky(service, course, user, scope):
            if course.pk == django_pk:
                raise DatabaseError("disk full")
            return CourseProgress.objects.using(scope.using).create(
                course=course, user=user, completed_lectures=[]
            )

        with patch.object(EnrollmentService, "_create_progress", autospec=True, side_effect=flaky):
            with self.assertRaises(PersistenceError):
                self.enroll([self.python.pk, self.django.pk])

        self.assertFalse(self.python.is_enrolled(self.user))
        self.assertFalse(self.django.is_enrolled(self.user))
        self.assertFalse(CourseProgress.objects.exists())
        self.assertFalse(self.user.profile.courses.exists())
        self.assertFalse(self.user.profile.course_progress.exists())

    def test_duplicate_progress_record_aborts_enrollment(self):
        CourseProgress.objects.create(course=self.python, user=self.user, completed_lectures=[])

        with self.assertRaises(PersistenceError):
            self.enroll([self.django.pk, self.python.pk])

        self.assertFalse(self.python.is_enrolled(self.user))
        self.assertFalse(self.django.is_enrolled(self.user))
        self.assertEqual(CourseProgress.objects.filter(user=self.user).count(), 1)
        self.assertFalse(self.user.profile.courses.exists())
        self.assertFalse(self.user.profile.course_progress.exists())

    def test_enrollment_email_sent_after_commit(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            self.enroll([self.python.pk, self.django.pk])

        self.assertEqual(len(callbacks), 2)
        self.assertEqual(len(mail.outbox), 2)
        self.assertEqual(mail.outbox[0].subject, "Successfully Enrolled into Python")
        self.assertEqual(mail.outbox[0].to, ["max@test.com"])
        self.assertEqual(mail.outbox[1].subject, "Successfully Enrolled into Django")

    def test_no_email_for_skipped_courses(self):
        self.enroll([self.python.pk])
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            self.enroll([self.python.pk])

        self.assertEqual(callbacks, [])
        self.assertEqual(mail.outbox, [])

    def test_aborted_scope_sends_no_email(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with TransactionScope() as scope:
                EnrollmentService().enroll([self.python.pk], self.user.pk, scope)
                scope.abort()

        self.assertEqual(callbacks, [])
        self.assertEqual(mail.outbox, [])
        self.assertFalse(self.python.is_enrolled(self.user))

    def test_notification_failure_does_not_affect_enrollment(self):
        notifier = Mock()
        notifier.send_enrollment_confirmation.side_effect = DeliveryError("smtp down")

        with self.assertLogs("elearning.services.enrollment.enrollment_service", level="ERROR"):
            with self.captureOnCommitCallbacks(execute=True):
                result = self.enroll([self.python.pk], service=EnrollmentService(notifier=notifier))

        notifier.send_enrollment_confirmation.assert_called_once_with(
            "max@test.com", "Max Mustermann", "Python"
        )
        self.assertEqual(result.outcomes[0].status, CourseOutcomeStatus.ENROLLED)
        self.assertTrue(self.python.is_enrolled(self.user))


class ConcurrentEnrollmentTests(TransactionTestCase):
    @skipUnlessDBFeature("has_select_for_update")
    def test_parallel_enrollments_create_one_progress_record(self):
        user = User.objects.create_user(username="Max", password="Musterpassword", email="max@test.com")
        course = Course.objects.create(course_name="Python", price="499.00")
        barrier = threading.Barrier(2)
        outcomes, errors = [], []

        def enroll():
            try:
                barrier.wait(timeout=10)
                with TransactionScope() as scope:
                    result = EnrollmentService(notifier=Mock()).enroll([course.pk], user.pk, scope)
                    scope.commit()
                outcomes.append(result.outcomes[0].status)
            except Exception as exc:
                errors.append(exc)
            finally:
                connection.close()

        threads = [threading.Thread(target=enroll) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        self.assertEqual(errors, [])
        self.assertCountEqual(
            outcomes, [CourseOutcomeStatus.ENROLLED, CourseOutcomeStatus.ALREADY_ENROLLED]
        )
        self.assertEqual(CourseProgress.objects.filter(user=user, course=course).count(), 1)
        self.assertEqual(course.students_enrolled.filter(pk=user.pk).count(), 1)
