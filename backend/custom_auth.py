from typing import Optional, TypeVar

from django.contrib.auth.models import AbstractBaseUser
from rest_framework import HTTP_HEADER_ENCODING
from rest_framework.request import Request

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.tokens import Token

AuthUser = TypeVar("AuthUser", AbstractBaseUser, TokenUser)

ACCESS_TOKEN_COOKIE = "access_token"


class CookieJWTAuthentication(JWTAuthentication):
    """
    JWT authentication reading the access token from the ``access_token``
    cookie first and from the ``Authorization: Bearer`` header otherwise.

    The browser frontend keeps its token in an HttpOnly cookie; scripts and
    the checkout callback send the header.
    """

    def authenticate(self, request: Request) -> Optional[tuple[AuthUser, Token]]:
        cookie = request.COOKIES.get(ACCESS_TOKEN_COOKIE) or None
        if cookie is None:
            return super().authenticate(request)

        validated_token = self.get_validated_token(cookie.encode(HTTP_HEADER_ENCODING))
        return self.get_user(validated_token), validated_token
