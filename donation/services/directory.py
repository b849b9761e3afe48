"""
Directory queries feeding the proximity matcher, plus the JSON shapes
returned for donors, hospitals and urgency requests.
"""
from __future__ import annotations

from typing import Optional

from donation.blood import ALL_BLOOD_TYPES, ELIGIBLE, urgency_label
from donation.models import Donor, Hospital, UrgencyRequest, UrgencyResponse
from donation.services.matching import (
    Coordinate,
    DonorCandidate,
    haversine_miles,
    match,
    round_half_up,
)


def eligible_donor_candidates(blood_type: Optional[str] = None) -> list[DonorCandidate]:
    """Snapshot of matchable donors: eligible and with both coordinates set."""
    qs = Donor.objects.filter(
        latitude__isnull=False,
        longitude__isnull=False,
        eligibility_status=ELIGIBLE,
    )
    if blood_type and blood_type != ALL_BLOOD_TYPES:
        qs = qs.filter(blood_type=blood_type)
    rows = qs.order_by('id').values(
        'id', 'first_name', 'last_name', 'blood_type', 'latitude', 'longitude', 'eligibility_status'
    )
    return [DonorCandidate(**row) for row in rows]


def hospital_origin_for(user) -> Optional[Hospital]:
    """The user's hospital if it has a stored location, else ``None``."""
    return Hospital.objects.filter(
        user=user, latitude__isnull=False, longitude__isnull=False
    ).first()


def nearby_donors(hospital: Hospital, *, blood_type: Optional[str], max_distance: int) -> dict:
    origin = Coordinate(hospital.latitude, hospital.longitude)
    results = match(origin, eligible_donor_candidates(blood_type), max_distance, blood_type)
    donors = [r.as_dict() for r in results]
    return {
        'hospital': {
            'id': hospital.id,
            'name': hospital.name,
            'latitude': hospital.latitude,
            'longitude': hospital.longitude,
        },
        'donors': donors,
        'totalCount': len(donors),
        'bloodType': blood_type or ALL_BLOOD_TYPES,
        'maxDistance': max_distance,
    }


def nearby_urgency_requests(donor: Donor, *, max_distance: float) -> list[dict]:
    """Active urgency requests within ``max_distance`` miles of the donor.

    Each entry carries the donor's own response (and its appointment) so
    the dashboard can show schedule/reschedule/cancel controls.
    """
    origin = Coordinate(donor.latitude, donor.longitude)
    qs = (
        UrgencyRequest.objects.filter(
            is_active=True,
            hospital__latitude__isnull=False,
            hospital__longitude__isnull=False,
        )
        .select_related('hospital')
        .order_by('-urgency_level', '-created_at')
    )
    responses = {
        r.urgency_request_id: r
        for r in UrgencyResponse.objects.filter(donor=donor).select_related('scheduled_appointment')
    }

    data: list[dict] = []
    for req in qs:
        h = req.hospital
        distance = haversine_miles(origin, Coordinate(h.latitude, h.longitude))
        if not distance <= max_distance:
            continue
        item = format_urgency_request(req)
        item['distance'] = round_half_up(distance)
        response = responses.get(req.id)
        if response is not None:
            item['user_response'] = format_urgency_response(response)
        data.append(item)
    data.sort(key=lambda x: x['distance'])
    return data


# ---------------------------------------------------------------------
# JSON shapes
# ---------------------------------------------------------------------
def format_hospital(h: Hospital) -> dict:
    return {
        'id': h.id,
        'user_id': h.user_id,
        'name': h.name,
        'address': h.address,
        'city': h.city,
        'state': h.state,
        'zip_code': h.zip_code,
        'phone_number': h.phone_number,
        'email': h.email,
        'latitude': h.latitude,
        'longitude': h.longitude,
        'operating_hours': h.operating_hours,
        'blood_urgency_level': h.blood_urgency_level,
        'blood_urgency_label': urgency_label(h.blood_urgency_level),
        'created_at': h.created_at.isoformat() if h.created_at else None,
        'updated_at': h.updated_at.isoformat() if h.updated_at else None,
    }


def format_donor(d: Donor) -> dict:
    return {
        'id': d.id,
        'user_id': d.user_id,
        'first_name': d.first_name,
        'last_name': d.last_name,
        'date_of_birth': d.date_of_birth.isoformat() if d.date_of_birth else None,
        'gender': d.gender,
        'phone_number': d.phone_number,
        'street': d.street,
        'city': d.city,
        'state': d.state,
        'zip_code': d.zip_code,
        'blood_type': d.blood_type,
        'weight': d.weight,
        'height': d.height,
        'has_chronic_illness': d.has_chronic_illness,
        'chronic_illness_details': d.chronic_illness_details,
        'has_traveled': d.has_traveled,
        'travel_details': d.travel_details,
        'has_tattoo': d.has_tattoo,
        'tattoo_details': d.tattoo_details,
        'is_on_medication': d.is_on_medication,
        'medication_details': d.medication_details,
        'emergency_contact_name': d.emergency_contact_name,
        'emergency_contact_phone': d.emergency_contact_phone,
        'emergency_contact_relationship': d.emergency_contact_relationship,
        'latitude': d.latitude,
        'longitude': d.longitude,
        'eligibility_status': d.eligibility_status,
        'updated_at': d.updated_at.isoformat() if d.updated_at else None,
    }


def format_urgency_request(req: UrgencyRequest) -> dict:
    h = req.hospital
    return {
        'id': req.id,
        'hospital_id': h.id,
        'hospital_name': h.name,
        'hospital_address': h.full_address,
        'hospital_phone': h.phone_number,
        'blood_type': req.blood_type,
        'urgency_level': req.urgency_level,
        'message': req.message,
        'is_active': req.is_active,
        'created_at': req.created_at.isoformat() if req.created_at else None,
    }


def format_appointment(a) -> dict:
    return {
        'id': a.id,
        'donor_id': a.donor_id,
        'hospital_id': a.hospital_id,
        'urgency_request_id': a.urgency_request_id,
        'appointment_date': a.appointment_date.isoformat(),
        'blood_type': a.blood_type,
        'status': a.status,
        'donor_arrived': a.donor_arrived,
        'donation_completed': a.donation_completed,
        'cancelled_at': a.cancelled_at.isoformat() if a.cancelled_at else None,
        'created_at': a.created_at.isoformat() if a.created_at else None,
    }


def format_urgency_response(r: UrgencyResponse) -> dict:
    data = {
        'response_type': r.response_type,
        'rejection_reason': r.rejection_reason,
        'scheduled_appointment_id': r.scheduled_appointment_id,
    }
    if r.scheduled_appointment is not None:
        data['appointment'] = format_appointment(r.scheduled_appointment)
    return data
