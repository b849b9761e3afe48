"""
Authentication views: signup, login, token refresh and logout.

Access and refresh tokens are signed JWTs issued by
``rest_framework_simplejwt``; see ``donation.authentication`` for how
they are verified on subsequent requests.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate, get_user_model
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.exceptions import AuthenticationFailed, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from donation.serializers.auth import LoginSerializer, SignupSerializer
from donation.services.accounts import issue_tokens, signup, user_payload
from donation.services.audit import log_action

logger = logging.getLogger(__name__)

User = get_user_model()


# ---------------------------------------------------------------------
# Signup
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([ScopedRateThrottle])
def signup_view(request):
    """
    Create a donor or hospital account.
    Body: ``email``, ``password``, ``role`` (donor|hospital).
    """
    s = SignupSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    user = signup(email=vd['email'], password=vd['password'], role=vd['role'])
    log_action(user=user, action='signup', object_type='user', object_id=user.id,
               detail={'role': user.role}, request=request)
    return Response({**issue_tokens(user), 'user': user_payload(user)}, status=201)

signup_view.cls.throttle_scope = 'signup'


# ---------------------------------------------------------------------
# Email/password login
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([ScopedRateThrottle])
def login_view(request):
    """
    Log in with ``email`` and ``password``.  When ``role`` is sent it must
    match the account's role; the role is never taken from the request.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    user = authenticate(request, username=vd['email'], password=vd['password'])
    if not user or (vd.get('role') and vd['role'] != user.role):
        log_action(user=None, action='login', object_type='user', object_id=None,
                   detail={'result': 'fail', 'email': vd['email']}, request=request)
        logger.info('Failed login for %s', vd['email'])
        raise AuthenticationFailed('Invalid credentials')

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok'}, request=request)
    return Response({**issue_tokens(user), 'user': user_payload(user)})

login_view.cls.throttle_scope = 'login'


# ---------------------------------------------------------------------
# JWT: refresh & logout
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_view(request):
    """Return a new access token for a refresh token."""
    s = TokenRefreshSerializer(data=request.data)
    try:
        s.is_valid(raise_exception=True)
    except TokenError as e:
        raise AuthenticationFailed(str(e))
    data = dict(s.validated_data)
    data['token'] = data.pop('access')
    return Response(data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Blacklist the given refresh token, or all of the caller's tokens."""
    refresh = request.data.get('refresh')
    count = 0
    if refresh:
        try:
            token = RefreshToken(refresh)
        except TokenError as e:
            raise ValidationError({'refresh': str(e)})
        if str(token.get('user_id')) != str(request.user.id):
            raise ValidationError({'refresh': 'token does not belong to this user'})
        token.blacklist()
        count = 1
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    log_action(user=request.user, action='logout', object_type='user', object_id=request.user.id,
               detail={'blacklisted': count})
    return Response({'ok': True, 'blacklisted': count})
