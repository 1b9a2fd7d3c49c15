from django.contrib.auth.models import User
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import RefreshToken

from elearning.courses.models import Course, RatingAndReview


class RatingViewsTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.student = User.objects.create_user(
            username="student", password="Musterpassword", first_name="Erika", email="erika@test.com"
        )
        cls.outsider = User.objects.create_user(username="outsider", password="Musterpassword")
        cls.course = Course.objects.create(course_name="Python", price="499.00")
        cls.course.students_enrolled.add(cls.student)

    def post_rating(self, **data):
        payload = {"courseId": self.course.pk, "rating": 5, "review": "Great course"}
        payload.update(data)
        return self.client.post(reverse("elearning:rating-list-create"), payload, format="json")

    def test_enrolled_student_creates_rating(self):
        self.client.force_authenticate(user=self.student)

        response = self.post_rating()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        body = response.json()
        self.assertEqual(body["message"], "Thank you for your review!")
        self.assertEqual(body["ratingReview"]["rating"], 5)
        self.assertEqual(body["ratingReview"]["user"]["email"], "erika@test.com")
        self.assertEqual(body["ratingReview"]["course"]["course_name"], "Python")

    def test_duplicate_rating_conflicts(self):
        self.client.force_authenticate(user=self.student)
        self.post_rating()

        response = self.post_rating(rating=1)

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(
            response.json(), {"success": False, "message": "You have already reviewed this course"}
        )

    def test_outsider_is_forbidden(self):
        self.client.force_authenticate(user=self.outsider)

        response = self.post_rating()

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(RatingAndReview.objects.exists())

    def test_unknown_course_not_found(self):
        self.client.force_authenticate(user=self.student)

        response = self.post_rating(courseId=99999)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_invalid_rating_is_bad_request(self):
        self.client.force_authenticate(user=self.student)

        response = self.post_rating(rating=9)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_anonymous_cannot_rate(self):
        response = self.post_rating()

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_access_token_cookie_authenticates(self):
        token = RefreshToken.for_user(self.student).access_token
        self.client.cookies["access_token"] = str(token)

        response = self.post_rating()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_bearer_header_authenticates(self):
        token = RefreshToken.for_user(self.student).access_token
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = self.post_rating()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_invalid_cookie_is_rejected(self):
        self.client.cookies["access_token"] = "bad token"

        response = self.post_rating()

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_ratings_are_public(self):
        RatingAndReview.objects.create(user=self.student, course=self.course, rating=4, review="Solid")

        response = self.client.get(reverse("elearning:rating-list-create"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.json()["success"])
        self.assertEqual(response.json()["data"][0]["review"], "Solid")

    def test_average_rating(self):
        RatingAndReview.objects.create(user=self.student, course=self.course, rating=4)

        response = self.client.get(reverse("elearning:rating-average"), {"courseId": self.course.pk})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {"success": True, "averageRating": 4.0})

    def test_average_rating_without_ratings(self):
        response = self.client.post(
            reverse("elearning:rating-average"), {"courseId": self.course.pk}, format="json"
        )

        self.assertEqual(response.json(), {"success": True, "averageRating": 0})
