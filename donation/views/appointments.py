from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Appointment
from ..permissions import IsDonorRole, IsHospitalRole
from ..serializers.requests import AppointmentCreateSerializer, AppointmentStatusSerializer
from ..services import appointments as appointment_svc
from ..services.directory import format_appointment
from ..services.profiles import donor_for, hospital_for


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDonorRole])
def donor_appointments(request):
    donor = donor_for(request.user)
    qs = Appointment.objects.filter(donor=donor).select_related('hospital').order_by('-appointment_date')
    data = []
    for a in qs:
        item = format_appointment(a)
        item['hospital_name'] = a.hospital.name
        item['hospital_address'] = a.hospital.full_address
        data.append(item)
    return Response(data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDonorRole])
def create_appointment(request):
    s = AppointmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    appt = appointment_svc.create_appointment(
        donor_for(request.user),
        hospital_id=vd['hospitalId'],
        appointment_date=vd['appointmentDate'],
        blood_type=vd.get('bloodType') or '',
    )
    return Response({'success': True, 'appointment': format_appointment(appt)}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsHospitalRole])
def hospital_appointments(request):
    """Appointments booked at the caller's hospital, soonest first."""
    hospital = hospital_for(request.user)
    qs = Appointment.objects.filter(hospital=hospital).select_related('donor').order_by('appointment_date')
    if request.query_params.get('status'):
        qs = qs.filter(status=request.query_params['status'])
    data = []
    for a in qs:
        item = format_appointment(a)
        item['donor_name'] = f"{a.donor.first_name} {a.donor.last_name}".strip()
        item['donor_phone'] = a.donor.phone_number
        data.append(item)
    return Response(data)


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsHospitalRole])
def appointment_status(request, pk: int):
    s = AppointmentStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    appt = appointment_svc.update_status(
        hospital_for(request.user),
        appointment_id=pk,
        status=vd.get('status'),
        donor_arrived=vd.get('donorArrived'),
        donation_completed=vd.get('donationCompleted'),
    )
    return Response({'success': True, 'appointment': format_appointment(appt)})
