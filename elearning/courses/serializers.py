"""
E-Learning Course Serializers

Serializers for courses, progress records and ratings as they appear in
API responses.

Author: DSP Development Team
Version: 1.0.0
"""

from rest_framework import serializers

from .models import Course, CourseProgress, RatingAndReview


class CourseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Course
        fields = ["id", "course_name", "course_description", "price", "created_at"]


class CourseSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Course
        fields = ["id", "course_name"]


class CourseProgressSerializer(serializers.ModelSerializer):
    """Progress record with the course name resolved."""

    course = CourseSummarySerializer(read_only=True)

    class Meta:
        model = CourseProgress
        fields = ["id", "course", "user", "completed_lectures", "created_at"]


class RatingUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.EmailField()


class RatingAndReviewSerializer(serializers.ModelSerializer):
    """Rating with reviewer and course joined, as listed to all visitors."""

    user = RatingUserSerializer(read_only=True)
    course = CourseSummarySerializer(read_only=True)

    class Meta:
        model = RatingAndReview
        fields = ["id", "rating", "review", "user", "course", "created_at"]
