"""
E-Learning Application URL Configuration

This module defines the URL routing structure for the E-Learning application.
Each functional area (payments, ratings) has its own group of patterns.

URL Structure:
- /api/elearning/payments/: Checkout, payment verification and receipts
- /api/elearning/ratings/: Course ratings and reviews

Author: DSP Development Team
Version: 1.0.0
"""

from typing import List
from django.urls import path, include, URLPattern

from .payments import views as payment_views
from .ratings import views as rating_views

app_name = 'elearning'

# --- Payments URL Patterns ---

payments_urlpatterns: List[URLPattern] = [
    path('capture/', payment_views.CapturePaymentView.as_view(), name='payment-capture'),
    path('verify/', payment_views.VerifyPaymentView.as_view(), name='payment-verify'),
    path('success-email/', payment_views.PaymentSuccessEmailView.as_view(), name='payment-success-email'),
]

# --- Ratings URL Patterns ---

ratings_urlpatterns: List[URLPattern] = [
    path('', rating_views.RatingListCreateView.as_view(), name='rating-list-create'),
    path('average/', rating_views.AverageRatingView.as_view(), name='rating-average'),
]

urlpatterns: List[URLPattern] = [
    path('payments/', include(payments_urlpatterns)),
    path('ratings/', include(ratings_urlpatterns)),
]
