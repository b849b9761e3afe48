from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..blood import URGENCY_MIN
from ..models import PatientRequest
from ..permissions import IsHospitalRole
from ..serializers.requests import PatientCreateSerializer, PatientStatusSerializer
from ..services.audit import log_action
from ..services.profiles import hospital_for


def _format_patient(p: PatientRequest) -> dict:
    return {
        'id': p.id,
        'hospital_id': p.hospital_id,
        'patient_name': p.patient_name,
        'blood_type': p.blood_type,
        'condition': p.condition,
        'urgency_level': p.urgency_level,
        'units_required': p.units_required,
        'required_date': p.required_date.isoformat() if p.required_date else None,
        'notes': p.notes,
        'status': p.status,
        'fulfilled_date': p.fulfilled_date.isoformat() if p.fulfilled_date else None,
        'created_at': p.created_at.isoformat() if p.created_at else None,
    }


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsHospitalRole])
def patients(request):
    """``GET`` lists the hospital's patient requests, most urgent first; ``POST`` adds one."""
    hospital = hospital_for(request.user)
    if request.method == 'GET':
        qs = PatientRequest.objects.filter(hospital=hospital).order_by('-urgency_level', '-created_at')
        return Response([_format_patient(p) for p in qs])

    s = PatientCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    p = PatientRequest.objects.create(
        hospital=hospital,
        patient_name=vd['patientName'],
        blood_type=vd['bloodType'],
        condition=vd.get('condition', ''),
        urgency_level=vd.get('urgencyLevel') or URGENCY_MIN,
        units_required=vd.get('unitsRequired') or 1,
        required_date=vd.get('requiredDate'),
        notes=vd.get('notes', ''),
    )
    log_action(user=request.user, action='patient_create', object_type='PatientRequest', object_id=p.id)
    return Response({'success': True, 'patient': _format_patient(p)}, status=status.HTTP_201_CREATED)


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsHospitalRole])
def patient_status(request, pk: int):
    s = PatientStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    hospital = hospital_for(request.user)
    p = PatientRequest.objects.filter(id=pk, hospital=hospital).first()
    if p is None:
        raise NotFound('Patient request not found')

    new_status = s.validated_data['status']
    p.status = new_status
    p.fulfilled_date = timezone.now() if new_status == PatientRequest.STATUS_FULFILLED else None
    p.save(update_fields=['status', 'fulfilled_date', 'updated_at'])
    log_action(user=request.user, action='patient_status', object_type='PatientRequest',
               object_id=p.id, detail={'status': new_status})
    return Response({'success': True, 'patient': _format_patient(p)})
