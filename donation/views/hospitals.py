"""
Hospital-facing views.

Profile and location management, the hospital-wide urgency level,
the public map feed, blood inventory and the nearby-donor search that
drives the proximity matcher.
"""
from __future__ import annotations

from django.conf import settings
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..models import Hospital
from ..permissions import IsHospitalRole
from ..serializers.profiles import CoordinatesSerializer, HospitalProfileSerializer
from ..serializers.requests import NearbyDonorsQuerySerializer, UrgencyLevelSerializer
from ..services.directory import format_hospital, hospital_origin_for, nearby_donors
from ..services.inventory import inventory_for, update_inventory
from ..services.profiles import hospital_for, set_coordinates, upsert_hospital_profile
from ..services.urgency import set_hospital_urgency


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsHospitalRole])
def hospital_profile(request):
    """``GET`` returns the caller's hospital; ``POST`` upserts it.

    Without explicit ``latitude``/``longitude`` the address is geocoded
    whenever it changes or no location is stored yet.
    """
    if request.method == 'GET':
        return Response(format_hospital(hospital_for(request.user)))

    s = HospitalProfileSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    hospital = upsert_hospital_profile(
        request.user, s.validated_data, HospitalProfileSerializer.FIELD_MAP, HospitalProfileSerializer.ADDRESS_FIELDS
    )
    return Response({
        'success': True,
        'message': 'Hospital profile updated successfully',
        'hospital': format_hospital(hospital),
    })


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsHospitalRole])
def hospital_urgency(request):
    s = UrgencyLevelSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    hospital = set_hospital_urgency(hospital_for(request.user), s.validated_data['urgencyLevel'])
    return Response({
        'success': True,
        'message': 'Urgency level updated successfully',
        'hospital': format_hospital(hospital),
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def hospitals_map(request):
    qs = Hospital.objects.filter(latitude__isnull=False, longitude__isnull=False).order_by('id')
    data = [{
        'id': h.id,
        'name': h.name,
        'address': h.address,
        'city': h.city,
        'state': h.state,
        'zip_code': h.zip_code,
        'latitude': h.latitude,
        'longitude': h.longitude,
        'blood_urgency_level': h.blood_urgency_level,
    } for h in qs]
    return Response(data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsHospitalRole])
def nearby_donors_view(request):
    """Eligible donors near the caller's hospital, nearest first.

    Query params:
      - bloodType: one of the eight ABO/Rh types, or ``all`` (default)
      - maxDistance: integer miles (default ``NEARBY_DONORS_DEFAULT_MILES``)
    """
    q = NearbyDonorsQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    hospital = hospital_origin_for(request.user)
    if hospital is None:
        raise ValidationError('Hospital location not set. Please update your address in profile.')
    max_distance = q.validated_data.get('maxDistance') or settings.NEARBY_DONORS_DEFAULT_MILES
    return Response(nearby_donors(hospital, blood_type=q.validated_data.get('bloodType'), max_distance=max_distance))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def hospital_coordinates(request, pk: int):
    s = CoordinatesSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    hospital = set_coordinates(Hospital, pk, request.user, **s.validated_data)
    return Response({
        'success': True,
        'message': 'Coordinates updated successfully',
        'hospital': {
            'id': hospital.id,
            'name': hospital.name,
            'latitude': hospital.latitude,
            'longitude': hospital.longitude,
        },
    })


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsHospitalRole])
def hospital_inventory(request):
    """Blood stock keyed ``A_plus``, ``O_negative``, ...; ``POST`` upserts quantities."""
    hospital = hospital_for(request.user)
    if request.method == 'GET':
        return Response(inventory_for(hospital))
    return Response(update_inventory(hospital, request.data))
