"""
E-Learning User Management Models

This module defines the user-related models for the E-Learning system,
extending Django's built-in User model with the student's owned course
collections and automatic profile management through Django signals.

Models:
- Profile: Courses and progress records owned by a user

Features:
- Automatic profile creation for new users
- Set semantics for owned courses and progress records (many-to-many)
- Proper signal handling for profile lifecycle management

Author: DSP Development Team
Version: 1.0.0
"""

from django.db import models
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils.translation import gettext_lazy as _


class Profile(models.Model):
    """
    Extended user profile model for the E-Learning system.

    Email address and display name are taken from the Django user; the
    profile adds the user's side of each enrollment.

    Attributes:
        user: One-to-one relationship with Django User model
        courses: Courses the user is enrolled in
        course_progress: Progress records of the user's courses

    The profile is automatically created when a new user is registered
    and maintains a one-to-one relationship with the User model.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        verbose_name=_("User"),
        help_text=_("Associated user account"),
    )

    courses = models.ManyToManyField(
        "elearning.Course",
        blank=True,
        related_name="enrolled_profiles",
        verbose_name=_("Courses"),
        help_text=_("Courses the user is enrolled in"),
    )

    course_progress = models.ManyToManyField(
        "elearning.CourseProgress",
        blank=True,
        related_name="+",
        verbose_name=_("Course Progress"),
        help_text=_("Progress records of the enrolled courses"),
    )

    class Meta:
        verbose_name = _("User Profile")
        verbose_name_plural = _("User Profiles")
        db_table = "elearning_profile"

    def __str__(self) -> str:
        """
        String representation of the profile.

        Returns:
            Formatted string with username and profile indicator
        """
        return f"{self.user.username} Profile"

    def __repr__(self) -> str:
        return f"<Profile(user={self.user.username})>"

    @property
    def display_name(self) -> str:
        """Full name of the user, falling back to the username."""
        return self.user.get_full_name() or self.user.username


# --- Signal Handlers for Automatic Profile Management ---


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created: bool, **kwargs) -> None:
    """
    Automatically create a user profile when a new user is created.

    Args:
        sender: The User model class
        instance: The actual User instance that was saved
        created: Boolean indicating if this is a new instance
        **kwargs: Additional signal arguments
    """
    if created:
        Profile.objects.get_or_create(user=instance)
