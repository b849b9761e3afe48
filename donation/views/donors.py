"""
Donor-facing views: profile, location, nearby urgency requests and the
responses to them (schedule, reject, reschedule, cancel).
"""
from __future__ import annotations

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Donor
from ..permissions import IsDonorRole
from ..serializers.profiles import CoordinatesSerializer, DonorProfileSerializer
from ..serializers.requests import (
    RadiusQuerySerializer,
    RejectUrgencyRequestSerializer,
    RescheduleAppointmentSerializer,
    ScheduleAppointmentSerializer,
)
from ..services import appointments as appointment_svc
from ..services.directory import format_appointment, format_donor, nearby_urgency_requests
from ..services.profiles import donor_for, set_coordinates, upsert_donor_profile


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsDonorRole])
def donor_profile(request):
    """``GET`` returns the caller's donor profile; ``POST`` upserts it.

    Health questionnaire answers arrive as ``'yes'``/``'no'`` strings and
    are stored as booleans.  Changing the address re-geocodes the donor
    unless ``latitude``/``longitude`` are sent explicitly.
    """
    if request.method == 'GET':
        return Response(format_donor(donor_for(request.user)))

    s = DonorProfileSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    donor = upsert_donor_profile(
        request.user, s.validated_data, DonorProfileSerializer.FIELD_MAP, DonorProfileSerializer.ADDRESS_FIELDS
    )
    return Response({'success': True, 'message': 'Profile updated successfully', 'donor': format_donor(donor)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def donor_coordinates(request, pk: int):
    s = CoordinatesSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    donor = set_coordinates(Donor, pk, request.user, **s.validated_data)
    return Response({
        'success': True,
        'message': 'Coordinates updated successfully',
        'donor': {
            'id': donor.id,
            'first_name': donor.first_name,
            'last_name': donor.last_name,
            'latitude': donor.latitude,
            'longitude': donor.longitude,
        },
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDonorRole])
def urgency_requests_for_donor(request):
    """Active urgency requests near the donor, nearest first.

    Query params:
      - maxDistance: radius in miles (default ``URGENCY_REQUEST_RADIUS_MILES``)
    """
    q = RadiusQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    donor = donor_for(request.user)
    if donor.latitude is None or donor.longitude is None:
        raise ValidationError('Donor location not set. Please update your address in profile.')
    radius = q.validated_data.get('maxDistance') or settings.URGENCY_REQUEST_RADIUS_MILES
    return Response(nearby_urgency_requests(donor, max_distance=radius))


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDonorRole])
def schedule_appointment(request):
    s = ScheduleAppointmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    appt = appointment_svc.schedule_for_urgency_request(
        donor_for(request.user),
        urgency_request_id=vd['urgencyRequestId'],
        appointment_date=vd['appointmentDate'],
        hospital_id=vd.get('hospitalId'),
        blood_type=vd.get('bloodType') or '',
    )
    return Response({
        'success': True,
        'message': 'Appointment scheduled successfully',
        'appointment': format_appointment(appt),
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDonorRole])
def reject_urgency_request(request):
    s = RejectUrgencyRequestSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    response = appointment_svc.reject_urgency_request(
        donor_for(request.user),
        urgency_request_id=s.validated_data['urgencyRequestId'],
        reason=s.validated_data.get('rejectionReason', ''),
    )
    return Response({'success': True, 'message': 'Request rejected', 'responseId': response.id})


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsDonorRole])
def reschedule_appointment(request):
    s = RescheduleAppointmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appt = appointment_svc.reschedule(
        donor_for(request.user),
        appointment_id=s.validated_data['appointmentId'],
        new_date=s.validated_data['newAppointmentDate'],
    )
    return Response({'success': True, 'message': 'Appointment rescheduled', 'appointment': format_appointment(appt)})


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsDonorRole])
def cancel_appointment(request, pk: int):
    appt = appointment_svc.cancel(donor_for(request.user), appointment_id=pk)
    return Response({'success': True, 'message': 'Appointment cancelled', 'appointment': format_appointment(appt)})
