from django.db.models import Count, Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import UrgencyRequest, UrgencyResponse
from ..permissions import IsHospitalRole
from ..serializers.requests import UrgencyRequestSerializer, UrgencyRequestUpdateSerializer
from ..services import urgency as urgency_svc
from ..services.directory import format_urgency_request
from ..services.profiles import hospital_for


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsHospitalRole])
def hospital_urgency_requests(request):
    """List the caller's urgency requests (``?active=1`` for open ones) or post a new one."""
    hospital = hospital_for(request.user)
    if request.method == 'GET':
        qs = (
            UrgencyRequest.objects.filter(hospital=hospital)
            .select_related('hospital')
            .annotate(
                scheduled_count=Count('responses', filter=Q(responses__response_type=UrgencyResponse.TYPE_SCHEDULED)),
                rejected_count=Count('responses', filter=Q(responses__response_type=UrgencyResponse.TYPE_REJECTED)),
            )
            .order_by('-created_at')
        )
        if (request.query_params.get('active') or '') in ('1', 'true', 'True'):
            qs = qs.filter(is_active=True)
        data = []
        for req in qs:
            item = format_urgency_request(req)
            item['responses'] = {
                'scheduled': req.scheduled_count,
                'rejected': req.rejected_count,
            }
            data.append(item)
        return Response(data)

    s = UrgencyRequestSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    req = urgency_svc.create_request(
        hospital,
        blood_type=s.validated_data['bloodType'],
        urgency_level=s.validated_data['urgencyLevel'],
        message=s.validated_data.get('message', ''),
    )
    return Response({'success': True, 'urgencyRequest': format_urgency_request(req)}, status=status.HTTP_201_CREATED)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsHospitalRole])
def hospital_urgency_request_detail(request, pk: int):
    """``PUT`` edits a request; ``DELETE`` closes it (rows are kept for history)."""
    hospital = hospital_for(request.user)
    if request.method == 'DELETE':
        req = urgency_svc.deactivate_request(hospital, pk)
        return Response({'success': True, 'urgencyRequest': format_urgency_request(req)})

    s = UrgencyRequestUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    req = urgency_svc.update_request(
        hospital, pk,
        blood_type=vd.get('bloodType'),
        urgency_level=vd.get('urgencyLevel'),
        message=vd.get('message'),
        is_active=vd.get('isActive'),
    )
    return Response({'success': True, 'urgencyRequest': format_urgency_request(req)})
