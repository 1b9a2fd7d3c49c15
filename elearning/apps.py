"""
E-Learning Application Configuration

This module contains the Django application configuration for the course
marketplace. The application sells courses, enrolls paying students and
collects ratings and reviews.

Author: DSP Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class ElearningConfig(AppConfig):
    """
    Configuration class for the E-Learning Django application.

    Attributes:
        default_auto_field: Default primary key field type for models
        name: Application name for Django registration
        verbose_name: Human-readable application name for admin interface
    """

    default_auto_field: str = "django.db.models.BigAutoField"
    name: str = "elearning"
    verbose_name: str = "E-Learning Marketplace"

    def ready(self) -> None:
        """
        Register the profile signal handlers.

        Importing the user models connects ``create_user_profile`` to the
        user's ``post_save``; the import is idempotent.
        """
        super().ready()
        from .users import models  # noqa: F401
