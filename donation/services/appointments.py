"""
Appointment scheduling and the donor's responses to urgency requests.
"""
import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from donation.models import Appointment, Hospital, UrgencyRequest, UrgencyResponse

logger = logging.getLogger(__name__)


def _future_or_raise(when):
    if when <= timezone.now():
        raise ValidationError({'appointmentDate': 'appointment must be in the future'})


def create_appointment(donor, *, hospital_id: int, appointment_date, blood_type: str = '') -> Appointment:
    hospital = Hospital.objects.filter(id=hospital_id).first()
    if hospital is None:
        raise NotFound('Hospital not found')
    _future_or_raise(appointment_date)
    appt = Appointment.objects.create(
        donor=donor,
        hospital=hospital,
        appointment_date=appointment_date,
        blood_type=blood_type or donor.blood_type,
    )
    logger.info('Appointment %s scheduled: donor %s at hospital %s', appt.id, donor.id, hospital.id)
    return appt


def schedule_for_urgency_request(donor, *, urgency_request_id: int, appointment_date,
                                 hospital_id=None, blood_type: str = '') -> Appointment:
    """Book an appointment answering an urgency request.

    Answering again replaces an earlier rejection; an existing scheduled
    answer with a live appointment must be rescheduled instead.
    """
    req = UrgencyRequest.objects.select_related('hospital').filter(id=urgency_request_id, is_active=True).first()
    if req is None:
        raise NotFound('Urgency request not found')
    if hospital_id is not None and hospital_id != req.hospital_id:
        raise ValidationError({'hospitalId': 'does not match the urgency request'})
    _future_or_raise(appointment_date)

    with transaction.atomic():
        response = UrgencyResponse.objects.select_for_update().filter(urgency_request=req, donor=donor).first()
        if (
            response is not None
            and response.scheduled_appointment is not None
            and response.scheduled_appointment.status == Appointment.STATUS_SCHEDULED
        ):
            raise ValidationError('An appointment is already scheduled for this request')
        appt = Appointment.objects.create(
            donor=donor,
            hospital=req.hospital,
            urgency_request=req,
            appointment_date=appointment_date,
            blood_type=blood_type or req.blood_type,
        )
        UrgencyResponse.objects.update_or_create(
            urgency_request=req,
            donor=donor,
            defaults={
                'response_type': UrgencyResponse.TYPE_SCHEDULED,
                'rejection_reason': '',
                'scheduled_appointment': appt,
            },
        )
    logger.info('Donor %s scheduled appointment %s for urgency request %s', donor.id, appt.id, req.id)
    return appt


def reject_urgency_request(donor, *, urgency_request_id: int, reason: str = '') -> UrgencyResponse:
    """Record a rejection; a live appointment booked for the request is cancelled."""
    req = UrgencyRequest.objects.filter(id=urgency_request_id).first()
    if req is None:
        raise NotFound('Urgency request not found')
    with transaction.atomic():
        response = (
            UrgencyResponse.objects.select_for_update()
            .select_related('scheduled_appointment')
            .filter(urgency_request=req, donor=donor)
            .first()
        )
        if response is None:
            response = UrgencyResponse(urgency_request=req, donor=donor)
        appt = response.scheduled_appointment
        if appt is not None and appt.status == Appointment.STATUS_SCHEDULED:
            appt.status = Appointment.STATUS_CANCELLED
            appt.cancelled_at = timezone.now()
            appt.save(update_fields=['status', 'cancelled_at', 'updated_at'])
            logger.info('Appointment %s cancelled by rejection of urgency request %s', appt.id, req.id)
        response.response_type = UrgencyResponse.TYPE_REJECTED
        response.rejection_reason = reason
        response.scheduled_appointment = None
        response.save()
    return response


def _donor_appointment(donor, appointment_id: int) -> Appointment:
    appt = Appointment.objects.filter(id=appointment_id, donor=donor).first()
    if appt is None:
        raise NotFound('Appointment not found')
    return appt


def reschedule(donor, *, appointment_id: int, new_date) -> Appointment:
    appt = _donor_appointment(donor, appointment_id)
    if appt.status != Appointment.STATUS_SCHEDULED:
        raise ValidationError(f'Cannot reschedule a {appt.status} appointment')
    _future_or_raise(new_date)
    appt.appointment_date = new_date
    appt.save(update_fields=['appointment_date', 'updated_at'])
    return appt


def cancel(donor, *, appointment_id: int) -> Appointment:
    appt = _donor_appointment(donor, appointment_id)
    if appt.status == Appointment.STATUS_COMPLETED:
        raise ValidationError('Cannot cancel a completed appointment')
    if appt.status != Appointment.STATUS_CANCELLED:
        appt.status = Appointment.STATUS_CANCELLED
        appt.cancelled_at = timezone.now()
        appt.save(update_fields=['status', 'cancelled_at', 'updated_at'])
    return appt


def update_status(hospital, *, appointment_id: int, status=None, donor_arrived=None,
                  donation_completed=None) -> Appointment:
    """Hospital-side check-in: arrival, completion or cancellation.

    Completed and cancelled appointments are final.  Completing a
    donation implies the donor arrived.
    """
    appt = Appointment.objects.filter(id=appointment_id, hospital=hospital).first()
    if appt is None:
        raise NotFound('Appointment not found')
    if appt.status != Appointment.STATUS_SCHEDULED:
        raise ValidationError(f'Cannot update a {appt.status} appointment')

    if donation_completed or status == Appointment.STATUS_COMPLETED:
        appt.donation_completed = True
        appt.donor_arrived = True
        appt.status = Appointment.STATUS_COMPLETED
    elif status == Appointment.STATUS_CANCELLED:
        appt.status = Appointment.STATUS_CANCELLED
        appt.cancelled_at = timezone.now()
    if donor_arrived is not None and appt.status != Appointment.STATUS_COMPLETED:
        appt.donor_arrived = donor_arrived
    appt.save()
    return appt
