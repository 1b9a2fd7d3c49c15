import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Course",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "course_name",
                    models.CharField(
                        help_text="Display name of the course",
                        max_length=200,
                        verbose_name="Course Name",
                    ),
                ),
                (
                    "course_description",
                    models.TextField(
                        blank=True,
                        help_text="Short description shown in the course catalogue",
                        verbose_name="Description",
                    ),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Course price in the major currency unit",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                        verbose_name="Price",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="Created At"),
                ),
                (
                    "students_enrolled",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Users enrolled in this course",
                        related_name="roster_courses",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Enrolled Students",
                    ),
                ),
            ],
            options={
                "verbose_name": "Course",
                "verbose_name_plural": "Courses",
                "db_table": "elearning_course",
                "ordering": ["course_name"],
            },
        ),
        migrations.CreateModel(
            name="CourseProgress",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "completed_lectures",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Identifiers of the lectures the user has completed",
                        verbose_name="Completed Lectures",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="Created At"),
                ),
                (
                    "course",
                    models.ForeignKey(
                        help_text="Course being tracked",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="progress_records",
                        to="elearning.course",
                        verbose_name="Course",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User whose progress is being tracked",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="course_progress_records",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="User",
                    ),
                ),
            ],
            options={
                "verbose_name": "Course Progress",
                "verbose_name_plural": "Course Progress Entries",
                "db_table": "elearning_course_progress",
                "ordering": ["user", "course"],
                "unique_together": {("user", "course")},
            },
        ),
        migrations.CreateModel(
            name="RatingAndReview",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "rating",
                    models.PositiveSmallIntegerField(
                        help_text="Rating from 1 to 5",
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ],
                        verbose_name="Rating",
                    ),
                ),
                (
                    "review",
                    models.TextField(
                        blank=True,
                        default="",
                        help_text="Optional review text",
                        verbose_name="Review",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="Created At"),
                ),
                (
                    "course",
                    models.ForeignKey(
                        help_text="Rated course",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ratings_and_reviews",
                        to="elearning.course",
                        verbose_name="Course",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="Author of the rating",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ratings_and_reviews",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="User",
                    ),
                ),
            ],
            options={
                "verbose_name": "Rating and Review",
                "verbose_name_plural": "Ratings and Reviews",
                "db_table": "elearning_rating_and_review",
                "ordering": ["-rating", "-created_at"],
                "unique_together": {("user", "course")},
            },
        ),
        migrations.CreateModel(
            name="Profile",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        help_text="Associated user account",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="profile",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="User",
                    ),
                ),
                (
                    "courses",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Courses the user is enrolled in",
                        related_name="enrolled_profiles",
                        to="elearning.course",
                        verbose_name="Courses",
                    ),
                ),
                (
                    "course_progress",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Progress records of the enrolled courses",
                        related_name="+",
                        to="elearning.courseprogress",
                        verbose_name="Course Progress",
                    ),
                ),
            ],
            options={
                "verbose_name": "User Profile",
                "verbose_name_plural": "User Profiles",
                "db_table": "elearning_profile",
            },
        ),
    ]
