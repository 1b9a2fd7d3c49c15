"""
E-Learning Application Django Admin Configuration

This module provides the Django admin interface for the course marketplace.

The admin interface is organized into logical sections:
- User Management: User administration with the enrolled courses of the profile
- Course Management: Courses with their roster, progress records and ratings

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Optional
from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Avg, Count, QuerySet
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _

from .models import Course, CourseProgress, Profile, RatingAndReview

User = get_user_model()

# --- User Management Administration ---


class ProfileInline(admin.StackedInline):
    """
    Inline admin configuration for user profiles.

    Shows the courses a user is enrolled in directly within the user admin.
    """

    model = Profile
    can_delete = False
    verbose_name_plural = "Profile Information"
    fk_name = "user"
    fields = ("courses",)
    filter_horizontal = ("courses",)

    def get_extra(
        self, request: HttpRequest, obj: Optional[User] = None, **kwargs
    ) -> int:
        """Return 0 extra forms since profile should exist or be created automatically."""
        return 0


class UserAdmin(BaseUserAdmin):
    """User administration with the enrolled courses of the profile."""

    inlines = (ProfileInline,)
    list_display = (
        "username",
        "email",
        "first_name",
        "last_name",
        "is_staff",
        "is_active",
        "get_course_count",
    )
    list_select_related = ("profile",)
    search_fields = ("username", "first_name", "last_name", "email")
    ordering = ("username",)

    @admin.display(description=_("Courses"))
    def get_course_count(self, instance: User) -> Optional[int]:
        try:
            return instance.profile.courses.count()
        except Profile.DoesNotExist:
            return None

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        """Optimize queryset with profile prefetch for better performance."""
        return super().get_queryset(request).select_related("profile")


# Register enhanced user administration
admin.site.unregister(User)
admin.site.register(User, UserAdmin)

# --- Course Administration ---


class RatingAndReviewInline(admin.TabularInline):
    """Inline admin for the ratings of a course."""

    model = RatingAndReview
    extra = 0
    fields = ("user", "rating", "review", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    """
    Administration interface for courses.

    Shows price, roster size and average rating in the list view.
    """

    list_display = ("course_name", "price", "student_count", "average_rating", "created_at")
    search_fields = ("course_name", "course_description")
    filter_horizontal = ("students_enrolled",)
    readonly_fields = ("created_at",)
    inlines = [RatingAndReviewInline]

    fieldsets = (
        (_("Basic Information"), {"fields": ("course_name", "course_description", "price")}),
        (
            _("Enrollment"),
            {
                "fields": ("students_enrolled",),
                "description": _("Students who purchased this course"),
            },
        ),
        (_("Timestamps"), {"fields": ("created_at",), "classes": ("collapse",)}),
    )

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        """Annotate roster size and average rating."""
        return (
            super()
            .get_queryset(request)
            .annotate(
                _student_count=Count("students_enrolled", distinct=True),
                _average_rating=Avg("ratings_and_reviews__rating"),
            )
        )

    @admin.display(description=_("Students"), ordering="_student_count")
    def student_count(self, obj: Course) -> int:
        return obj._student_count

    @admin.display(description=_("Average Rating"), ordering="_average_rating")
    def average_rating(self, obj: Course) -> str:
        if obj._average_rating is None:
            return "-"
        return f"{obj._average_rating:.1f}"


@admin.register(CourseProgress)
class CourseProgressAdmin(admin.ModelAdmin):
    """Administration interface for course progress records."""

    list_display = ("user", "course", "completed_count", "created_at")
    list_filter = ("course",)
    search_fields = ("user__username", "user__email", "course__course_name")
    list_select_related = ("user", "course")
    readonly_fields = ("created_at",)

    @admin.display(description=_("Completed Lectures"))
    def completed_count(self, obj: CourseProgress) -> int:
        return len(obj.completed_lectures or [])


@admin.register(RatingAndReview)
class RatingAndReviewAdmin(admin.ModelAdmin):
    """Administration interface for ratings and reviews."""

    list_display = ("user", "course", "rating", "created_at")
    list_filter = ("rating", "course")
    search_fields = ("user__username", "course__course_name", "review")
    list_select_related = ("user", "course")
    readonly_fields = ("created_at",)
