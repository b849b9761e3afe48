from django.db import transaction
from rest_framework.exceptions import ValidationError

from donation.blood import blood_type_from_key, inventory_key
from donation.models import BloodInventory


def inventory_for(hospital) -> dict[str, int]:
    """``{'A_plus': 12, 'O_negative': 3, ...}`` for the types on record."""
    rows = BloodInventory.objects.filter(hospital=hospital).values_list('blood_type', 'quantity')
    return {inventory_key(bt): qty for bt, qty in rows}


def update_inventory(hospital, data: dict) -> dict[str, int]:
    """Upsert quantities; the whole payload is validated before any write."""
    if not isinstance(data, dict) or not data:
        raise ValidationError('inventory payload must be a non-empty object')
    parsed: dict[str, int] = {}
    errors: dict[str, str] = {}
    for key, raw in data.items():
        try:
            blood_type = blood_type_from_key(key)
        except KeyError:
            errors[key] = 'unknown blood type'
            continue
        try:
            quantity = int(raw)
        except (TypeError, ValueError):
            errors[key] = 'quantity must be an integer'
            continue
        if quantity < 0:
            errors[key] = 'quantity must not be negative'
            continue
        parsed[blood_type] = quantity
    if errors:
        raise ValidationError(errors)

    with transaction.atomic():
        for blood_type, quantity in parsed.items():
            BloodInventory.objects.update_or_create(
                hospital=hospital, blood_type=blood_type, defaults={'quantity': quantity}
            )
    return inventory_for(hospital)
