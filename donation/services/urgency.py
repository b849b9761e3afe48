import logging

from rest_framework.exceptions import NotFound

from donation.models import UrgencyRequest
from donation.services.broadcast import notify_urgency

logger = logging.getLogger(__name__)


def set_hospital_urgency(hospital, level: int):
    previous = hospital.blood_urgency_level
    hospital.blood_urgency_level = level
    hospital.save(update_fields=['blood_urgency_level', 'updated_at'])
    logger.info('Hospital %s urgency %s -> %s', hospital.id, previous, level)
    notify_urgency('hospital_level', {'hospitalId': hospital.id, 'urgencyLevel': level})
    return hospital


def create_request(hospital, *, blood_type: str, urgency_level: int, message: str = '') -> UrgencyRequest:
    req = UrgencyRequest.objects.create(
        hospital=hospital, blood_type=blood_type, urgency_level=urgency_level, message=message
    )
    notify_urgency('request_created', {'id': req.id, 'hospitalId': hospital.id,
                                       'bloodType': blood_type, 'urgencyLevel': urgency_level})
    return req


def update_request(hospital, request_id: int, *, blood_type=None, urgency_level=None,
                   message=None, is_active=None) -> UrgencyRequest:
    req = _own_request(hospital, request_id)
    if blood_type is not None:
        req.blood_type = blood_type
    if urgency_level is not None:
        req.urgency_level = urgency_level
    if message is not None:
        req.message = message
    if is_active is not None:
        req.is_active = is_active
    req.save()
    notify_urgency('request_updated', {'id': req.id, 'hospitalId': hospital.id,
                                       'urgencyLevel': req.urgency_level, 'isActive': req.is_active})
    return req


def deactivate_request(hospital, request_id: int) -> UrgencyRequest:
    return update_request(hospital, request_id, is_active=False)


def _own_request(hospital, request_id: int) -> UrgencyRequest:
    req = UrgencyRequest.objects.select_related('hospital').filter(id=request_id, hospital=hospital).first()
    if req is None:
        raise NotFound('Urgency request not found')
    return req
