"""
Donor and hospital profile upserts.

Both profiles are created empty at signup, so an upsert here is a
``get_or_create`` followed by a partial update of whatever fields the
dashboard sent.  When the address changes and the request carries no
explicit coordinates, the address is geocoded; a failed lookup keeps
the previous coordinates.
"""
import logging

from django.db import transaction
from rest_framework.exceptions import NotFound

from donation.models import Donor, Hospital
from donation.permissions import ensure_owner_or_admin
from donation.services.geocoding import geocode_address

logger = logging.getLogger(__name__)


def _apply(obj, validated: dict, field_map: dict) -> set[str]:
    changed: set[str] = set()
    for key, field in field_map.items():
        if key not in validated:
            continue
        value = validated[key]
        if value is None and field not in ('latitude', 'longitude', 'date_of_birth', 'weight', 'height'):
            continue
        if getattr(obj, field) != value:
            setattr(obj, field, value)
            changed.add(field)
    return changed


def _maybe_geocode(obj, validated: dict, changed: set[str], address_fields: set[str]) -> None:
    has_explicit = validated.get('latitude') is not None and validated.get('longitude') is not None
    if has_explicit:
        return
    missing = obj.latitude is None or obj.longitude is None
    if not (changed & address_fields) and not missing:
        return
    coordinate = geocode_address(obj.full_address)
    if coordinate is None:
        return
    obj.latitude = coordinate.latitude
    obj.longitude = coordinate.longitude


def upsert_donor_profile(user, validated: dict, field_map: dict, address_fields: set[str]) -> Donor:
    with transaction.atomic():
        donor, _ = Donor.objects.select_for_update().get_or_create(user=user)
        changed = _apply(donor, validated, field_map)
        _maybe_geocode(donor, validated, changed, address_fields)
        donor.save()
        if not user.profile_completed:
            user.profile_completed = True
            user.save(update_fields=['profile_completed'])
    logger.info('Donor profile %s updated (%s)', donor.id, ', '.join(sorted(changed)) or 'no changes')
    return donor


def upsert_hospital_profile(user, validated: dict, field_map: dict, address_fields: set[str]) -> Hospital:
    with transaction.atomic():
        hospital, _ = Hospital.objects.select_for_update().get_or_create(user=user)
        changed = _apply(hospital, validated, field_map)
        _maybe_geocode(hospital, validated, changed, address_fields)
        hospital.save()
        if not user.profile_completed:
            user.profile_completed = True
            user.save(update_fields=['profile_completed'])
    logger.info('Hospital profile %s updated (%s)', hospital.id, ', '.join(sorted(changed)) or 'no changes')
    return hospital


def set_coordinates(model, pk: int, user, *, latitude: float, longitude: float):
    """Overwrite a donor or hospital location; owners and admins only."""
    obj = model.objects.filter(pk=pk).first()
    if obj is None:
        raise NotFound(f"{model.__name__} not found")
    ensure_owner_or_admin(user, obj)
    obj.latitude = latitude
    obj.longitude = longitude
    obj.save(update_fields=['latitude', 'longitude', 'updated_at'])
    return obj


def hospital_for(user) -> Hospital:
    hospital = Hospital.objects.filter(user=user).first()
    if hospital is None:
        raise NotFound('Hospital profile not found')
    return hospital


def donor_for(user) -> Donor:
    donor = Donor.objects.filter(user=user).first()
    if donor is None:
        raise NotFound('Donor profile not found')
    return donor
