"""
E-Learning Application Models Registry

This module serves as the central models registry for the E-Learning application.
It imports and exposes all models from the logical submodules (users, courses)
to ensure they are properly registered with Django's ORM system.

Architecture:
- users/: User profile with owned courses and progress records
- courses/: Courses, progress records, ratings and reviews

Author: DSP Development Team
Version: 1.0.0
"""

from .users.models import Profile
from .courses.models import Course, CourseProgress, RatingAndReview

__all__ = ["Profile", "Course", "CourseProgress", "RatingAndReview"]
