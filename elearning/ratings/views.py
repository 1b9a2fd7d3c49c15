"""
E-Learning Rating Views

API endpoints for course ratings and reviews.

Endpoints:
- RatingListCreateView: GET lists all ratings, POST creates one (enrolled users only)
- AverageRatingView: Average rating of one course

Author: DSP Development Team
Version: 1.0.0
"""

import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticatedOrReadOnly, AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ..courses.serializers import RatingAndReviewSerializer
from ..exceptions import ElearningError
from ..services.ratings import RatingService

logger = logging.getLogger(__name__)


class RatingListCreateView(APIView):
    """
    List every rating or submit a new one.

    POST body: ``{"courseId": 3, "rating": 5, "review": "..."}``
    """

    permission_classes = [IsAuthenticatedOrReadOnly]

    def get(self, request: Request) -> Response:
        ratings = RatingService().list_ratings()
        return Response(
            {"success": True, "data": RatingAndReviewSerializer(ratings, many=True).data},
            status=status.HTTP_200_OK,
        )

    def post(self, request: Request) -> Response:
        try:
            rating_review = RatingService().create_rating(
                user_id=request.user.id,
                course_id=request.data.get("courseId"),
                rating=request.data.get("rating"),
                review=request.data.get("review"),
            )
        except ElearningError as exc:
            logger.info("Rating rejected for user %s: %s", request.user.id, exc.message)
            return Response(exc.to_response(), status=exc.status_code)

        return Response(
            {
                "success": True,
                "message": "Thank you for your review!",
                "ratingReview": RatingAndReviewSerializer(rating_review).data,
            },
            status=status.HTTP_201_CREATED,
        )


class AverageRatingView(APIView):
    """Average rating of a course, ``courseId`` from the query string or body."""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        return self._average(request.query_params.get("courseId"))

    def post(self, request: Request) -> Response:
        return self._average(request.data.get("courseId"))

    def _average(self, course_id) -> Response:
        average = RatingService().get_average_rating(course_id)
        return Response({"success": True, "averageRating": average}, status=status.HTTP_200_OK)
