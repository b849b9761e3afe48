"""
Bearer JWT authentication for the API.

Access tokens are issued and verified by ``rest_framework_simplejwt``.
This is the only credential scheme accepted: there is no fallback for
unsigned or legacy tokens.  The subclass exists to give the project a
stable import path for ``DEFAULT_AUTHENTICATION_CLASSES``.
"""
from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication


class BearerJWTAuthentication(JWTAuthentication):
    """``Authorization: Bearer <access token>``."""

    www_authenticate_realm = 'bloodlink'
