import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework.exceptions import ValidationError
from rest_framework_simplejwt.tokens import RefreshToken

from donation.models import Donor, Hospital

logger = logging.getLogger(__name__)

User = get_user_model()


def user_payload(user) -> dict:
    return {
        'id': user.id,
        'email': user.email,
        'role': user.role,
        'profileCompleted': user.profile_completed,
    }


def issue_tokens(user) -> dict:
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role
    return {
        'token': str(refresh.access_token),
        'refresh': str(refresh),
    }


def signup(*, email: str, password: str, role: str):
    """Create the account and its empty donor or hospital profile."""
    if User.objects.filter(email__iexact=email).exists():
        raise ValidationError('User already exists')
    with transaction.atomic():
        user = User.objects.create_user(username=email, email=email, password=password)
        user.role = role
        user.save(update_fields=['role'])
        if role == User.ROLE_DONOR:
            Donor.objects.create(user=user)
        elif role == User.ROLE_HOSPITAL:
            Hospital.objects.create(user=user)
    logger.info('Signup: user %s (%s)', user.id, role)
    return user
