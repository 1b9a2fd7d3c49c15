"""
E-Learning Course Marketplace Models

This module defines the models behind course purchases: the sellable
course with its student roster, the per-student progress record created on
enrollment, and the ratings students leave once enrolled.

Models:
- Course: Purchasable course with price and enrolled-student roster
- CourseProgress: Completed lectures of one student in one course
- RatingAndReview: One rating (and optional review) per student and course

Features:
- Roster uniqueness through the many-to-many through table
- At most one progress record and one rating per (user, course) pair
- Aggregated average rating per course

Author: DSP Development Team
Version: 1.0.0
"""

from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.utils.translation import gettext_lazy as _


class Course(models.Model):
    """
    Purchasable learning course.

    Attributes:
        course_name: Display name of the course
        course_description: Optional marketing description
        price: Price in the major currency unit
        students_enrolled: Roster of enrolled users
        created_at: Creation timestamp

    Example:
        >>> course = Course.objects.create(course_name="SQL Basics", price=499)
        >>> course.is_enrolled(user)  # False until the payment is verified
    """

    course_name = models.CharField(
        max_length=200,
        verbose_name=_("Course Name"),
        help_text=_("Display name of the course"),
    )

    course_description = models.TextField(
        blank=True,
        verbose_name=_("Description"),
        help_text=_("Short description shown in the course catalogue"),
    )

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        verbose_name=_("Price"),
        help_text=_("Course price in the major currency unit"),
    )

    students_enrolled = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="roster_courses",
        verbose_name=_("Enrolled Students"),
        help_text=_("Users enrolled in this course"),
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name=_("Created At"),
    )

    def __str__(self) -> str:
        """String representation of the course."""
        return self.course_name

    class Meta:
        verbose_name = _("Course")
        verbose_name_plural = _("Courses")
        ordering = ["course_name"]
        db_table = "elearning_course"

    def is_enrolled(self, user) -> bool:
        """Check if the user is on this course's roster."""
        user_id = getattr(user, "pk", user)
        return self.students_enrolled.filter(pk=user_id).exists()

    @property
    def price_in_minor_units(self) -> int:
        """Price in the smallest currency unit, as the payment gateway expects it."""
        return int(self.price * 100)


class CourseProgress(models.Model):
    """
    Progress of one student through one course.

    Created exactly once per (user, course) pair when the student is
    enrolled, starting with no completed lectures.
    """

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="progress_records",
        verbose_name=_("Course"),
        help_text=_("Course being tracked"),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="course_progress_records",
        verbose_name=_("User"),
        help_text=_("User whose progress is being tracked"),
    )

    completed_lectures = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Completed Lectures"),
        help_text=_("Identifiers of the lectures the user has completed"),
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name=_("Created At"),
    )

    def __str__(self) -> str:
        """String representation of the progress record."""
        return f"{self.user} - {self.course} ({len(self.completed_lectures)} completed)"

    class Meta:
        verbose_name = _("Course Progress")
        verbose_name_plural = _("Course Progress Entries")
        unique_together = ("user", "course")
        ordering = ["user", "course"]
        db_table = "elearning_course_progress"


class RatingAndReview(models.Model):
    """
    A student's rating of a course, optionally with a written review.

    Only roster members may rate a course, and only once.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="ratings_and_reviews",
        verbose_name=_("User"),
        help_text=_("Author of the rating"),
    )

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="ratings_and_reviews",
        verbose_name=_("Course"),
        help_text=_("Rated course"),
    )

    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        verbose_name=_("Rating"),
        help_text=_("Rating from 1 to 5"),
    )

    review = models.TextField(
        blank=True,
        default="",
        verbose_name=_("Review"),
        help_text=_("Optional review text"),
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name=_("Created At"),
    )

    def __str__(self) -> str:
        """String representation of the rating."""
        return f"{self.user} rated {self.course}: {self.rating}"

    class Meta:
        verbose_name = _("Rating and Review")
        verbose_name_plural = _("Ratings and Reviews")
        unique_together = ("user", "course")
        ordering = ["-rating", "-created_at"]
        db_table = "elearning_rating_and_review"
