"""
E-Learning User Serializers

This module provides the serializer for the enrolled-user view returned
after a verified payment: the user with every owned course and progress
record expanded.

Author: DSP Development Team
Version: 1.0.0
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from ..courses.serializers import CourseProgressSerializer, CourseSerializer

User = get_user_model()


class UserEnrollmentSerializer(serializers.ModelSerializer):
    """
    User data with the profile's courses and progress records nested.

    Expects the user to be loaded with ``select_related("profile")`` and
    the profile's collections prefetched; see ``load_enrolled_user``.
    """

    full_name = serializers.SerializerMethodField()
    courses = CourseSerializer(source="profile.courses", many=True, read_only=True)
    course_progress = CourseProgressSerializer(source="profile.course_progress", many=True, read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "full_name",
            "courses",
            "course_progress",
        )
        read_only_fields = fields

    def get_full_name(self, obj: User) -> str:
        """
        Get formatted full name of the user.

        Args:
            obj: User instance

        Returns:
            Full name or username if name is not available
        """
        full_name = f"{obj.first_name} {obj.last_name}".strip()
        return full_name or obj.username


def load_enrolled_user(user_id: int, using: str) -> User:
    """
    Load a user with profile, courses and progress records in four queries.

    Args:
        user_id: Primary key of the user
        using: Connection alias of the transaction scope

    Raises:
        User.DoesNotExist: If the user is missing
    """
    return (
        User.objects.using(using)
        .select_related("profile")
        .prefetch_related("profile__courses", "profile__course_progress__course")
        .get(pk=user_id)
    )
