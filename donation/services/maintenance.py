"""Development helpers behind ``DEBUG_ENDPOINTS_ENABLED``."""
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.forms.models import model_to_dict

from donation.models import (
    Appointment,
    BloodInventory,
    Donor,
    Hospital,
    PatientRequest,
    UrgencyRequest,
    UrgencyResponse,
)

logger = logging.getLogger(__name__)

User = get_user_model()


def dump_directory() -> dict:
    users = [
        {'id': u.id, 'email': u.email, 'role': u.role, 'profileCompleted': u.profile_completed}
        for u in User.objects.order_by('id')
    ]
    return {
        'users': users,
        'donors': [model_to_dict(d) for d in Donor.objects.order_by('id')],
        'hospitals': [model_to_dict(h) for h in Hospital.objects.order_by('id')],
        'patients': [model_to_dict(p) for p in PatientRequest.objects.order_by('id')],
    }


def reset_directory() -> dict:
    """Delete all domain rows and every non-admin account."""
    counts = {}
    with transaction.atomic():
        for model in (UrgencyResponse, Appointment, PatientRequest, UrgencyRequest,
                      BloodInventory, Donor, Hospital):
            counts[model.__name__], _ = model.objects.all().delete()
        counts['User'], _ = User.objects.exclude(role=User.ROLE_ADMIN).delete()
    logger.warning('Directory reset: %s', counts)
    return counts
