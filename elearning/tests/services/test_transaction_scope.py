from django.test import TestCase

from elearning.courses.models import Course
from elearning.services.database import ScopeState, TransactionScope, TransactionScopeError


class TransactionScopeTests(TestCase):
    def test_commit_keeps_writes(self):
        with TransactionScope() as scope:
            Course.objects.using(scope.using).create(course_name="Django Basics", price="10.00")
            scope.commit()

        self.assertEqual(scope.state, ScopeState.COMMITTED)
        self.assertTrue(Course.objects.filter(course_name="Django Basics").exists())

    def test_abort_discards_writes(self):
        with TransactionScope() as scope:
            Course.objects.using(scope.using).create(course_name="Django Basics", price="10.00")
            scope.abort()

        self.assertEqual(scope.state, ScopeState.ABORTED)
        self.assertFalse(Course.objects.filter(course_name="Django Basics").exists())

    def test_exception_aborts_and_propagates(self):
        with self.assertRaises(ValueError):
            with TransactionScope() as scope:
                Course.objects.using(scope.using).create(course_name="Django Basics", price="10.00")
                raise ValueError("boom")

        self.assertEqual(scope.state, ScopeState.ABORTED)
        self.assertFalse(Course.objects.exists())

    def test_unresolved_scope_is_aborted_with_warning(self):
        with self.assertLogs("elearning.services.database.transaction_scope", level="WARNING"):
            with TransactionScope() as scope:
                Course.objects.using(scope.using).create(course_name="Django Basics", price="10.00")

        self.assertEqual(scope.state, ScopeState.ABORTED)
        self.assertFalse(Course.objects.exists())

    def test_scope_resolves_only_once(self):
        with self.assertRaises(TransactionScopeError):
            with TransactionScope() as scope:
                scope.commit()
                scope.abort()

        self.assertEqual(scope.state, ScopeState.COMMITTED)

    def test_scope_cannot_be_reopened(self):
        scope = TransactionScope()
        with scope:
            scope.commit()

        with self.assertRaises(TransactionScopeError):
            with scope:
                pass

    def test_is_open_only_inside_block(self):
        scope = TransactionScope()
        self.assertFalse(scope.is_open)
        with scope:
            self.assertTrue(scope.is_open)
            scope.commit()
        self.assertFalse(scope.is_open)
