"""
Rating Service für DSP E-Learning Platform

Create, list and average course ratings. Only students on a course's roster
may rate it, and each student rates a course at most once.

Author: DSP Development Team
Version: 1.0.0
"""

import logging
from typing import Any, Optional

from django.db import IntegrityError, transaction
from django.db.models import Avg, QuerySet

from ...courses.models import Course, RatingAndReview
from ...exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from ..identifiers import parse_identifier

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class RatingService:
    """Ratings and reviews of courses."""

    def create_rating(self, user_id: Any, course_id: Any, rating: Any, review: Optional[str] = None) -> RatingAndReview:
        """
        Store a rating for a course the user is enrolled in.

        Raises:
            ValidationError: If course id or rating is missing or out of range
            NotFoundError: If the course does not exist
            ForbiddenError: If the user is not enrolled in the course
            ConflictError: If the user already rated the course
        """
        if course_id in (None, "") or rating in (None, ""):
            raise ValidationError("Course ID and rating are required")

        rating_value = self._parse_rating(rating)

        course_pk = parse_identifier(course_id)
        course = Course.objects.filter(pk=course_pk).first() if course_pk else None
        if course is None:
            raise NotFoundError("Course not found", resource="course")

        if not course.is_enrolled(user_id):
            raise ForbiddenError("You must be enrolled in the course to submit a review")

        if RatingAndReview.objects.filter(user_id=user_id, course=course).exists():
            raise ConflictError("You have already reviewed this course")

        try:
            with transaction.atomic():
                rating_review = RatingAndReview.objects.create(
                    user_id=user_id,
                    course=course,
                    rating=rating_value,
                    review=review or "",
                )
        except IntegrityError as exc:
            # concurrent submission for the same pair
            raise ConflictError("You have already reviewed this course") from exc

        logger.info("User %s rated course %s with %s", user_id, course.pk, rating_value)
        return rating_review

    def get_average_rating(self, course_id: Any) -> float:
        """
        Average rating of a course, 0 if it has no ratings.
        """
        course_pk = parse_identifier(course_id)
        if course_pk is None:
            return 0

        result = RatingAndReview.objects.filter(course_id=course_pk).aggregate(average=Avg("rating"))
        return result["average"] or 0

    def list_ratings(self) -> QuerySet:
        """All ratings, highest first, with reviewer and course joined."""
        return RatingAndReview.objects.select_related("user", "course").order_by("-rating", "-created_at")

    @staticmethod
    def _parse_rating(rating: Any) -> int:
        try:
            value = float(rating)
        except (TypeError, ValueError):
            raise ValidationError("Rating must be a number")

        if not value.is_integer() or not MIN_RATING <= value <= MAX_RATING:
            raise ValidationError(f"Rating must be a whole number between {MIN_RATING} and {MAX_RATING}")
        return int(value)
