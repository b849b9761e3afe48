"""
Blood-type, eligibility and urgency enumerations.

Inventory payloads use keys such as ``A_plus`` instead of ``A+`` because
the dashboards use them as form field names.  The translation is an
explicit table in both directions; unknown keys are rejected rather than
guessed.
"""
from __future__ import annotations

BLOOD_TYPES = ('A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-')
BLOOD_TYPE_CHOICES = [(bt, bt) for bt in BLOOD_TYPES]

# Sentinel accepted by list/filter endpoints meaning "no blood-type filter"
ALL_BLOOD_TYPES = 'all'

INVENTORY_KEYS: dict[str, str] = {
    'A+': 'A_plus',
    'A-': 'A_negative',
    'B+': 'B_plus',
    'B-': 'B_negative',
    'AB+': 'AB_plus',
    'AB-': 'AB_negative',
    'O+': 'O_plus',
    'O-': 'O_negative',
}
BLOOD_TYPE_BY_INVENTORY_KEY: dict[str, str] = {v: k for k, v in INVENTORY_KEYS.items()}

ELIGIBLE = 'eligible'
INELIGIBLE = 'ineligible'
DEFERRED = 'deferred'
ELIGIBILITY_CHOICES = [
    (ELIGIBLE, 'Eligible'),
    (INELIGIBLE, 'Ineligible'),
    (DEFERRED, 'Temporarily deferred'),
]

URGENCY_MIN = 1
URGENCY_MAX = 5
URGENCY_LABELS = {
    1: 'Normal',
    2: 'Elevated',
    3: 'High',
    4: 'Severe',
    5: 'Critical',
}
URGENCY_CHOICES = list(URGENCY_LABELS.items())


def inventory_key(blood_type: str) -> str:
    """``'AB-'`` -> ``'AB_negative'``; raises KeyError for unknown types."""
    return INVENTORY_KEYS[blood_type]


def blood_type_from_key(key: str) -> str:
    """Accept either an inventory key (``O_plus``) or a plain type (``O+``)."""
    if key in BLOOD_TYPE_BY_INVENTORY_KEY:
        return BLOOD_TYPE_BY_INVENTORY_KEY[key]
    if key in INVENTORY_KEYS:
        return key
    raise KeyError(key)


def urgency_label(level: int | None) -> str:
    """Display label for a level; empty for anything outside 1..5."""
    return URGENCY_LABELS.get(level, '')
