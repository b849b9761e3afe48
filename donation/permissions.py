"""
Role based permission classes.
"""
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import BasePermission

DONOR = 'donor'
HOSPITAL = 'hospital'
ADMIN = 'admin'


def _role(request):
    user = getattr(request, "user", None)
    if not (user and user.is_authenticated):
        return None
    return getattr(user, "role", None)


class IsDonorRole(BasePermission):
    """Allow access only to users with the donor role."""
    message = "donor account required"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _role(request) == DONOR


class IsHospitalRole(BasePermission):
    """Allow access only to users with the hospital role."""
    message = "hospital account required"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _role(request) == HOSPITAL


class IsAdminRole(BasePermission):
    """Administrators only."""
    def has_permission(self, request, view) -> bool:
        return _role(request) == ADMIN


def ensure_owner_or_admin(user, obj) -> None:
    """Raise PermissionDenied unless ``obj.user_id`` is the caller or the caller is an admin."""
    if getattr(user, "role", None) == ADMIN:
        return
    if getattr(obj, "user_id", None) != getattr(user, "id", None):
        raise PermissionDenied("forbidden for this profile")
