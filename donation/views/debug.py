"""
Administrative helpers, disabled unless ``DEBUG_ENDPOINTS_ENABLED``.

When disabled the routes answer 404 so their existence is not
advertised.
"""
import logging

from django.conf import settings
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Donor, Hospital
from ..permissions import IsAdminRole
from ..services.audit import log_action
from ..services.geocoding import geocode_missing
from ..services.maintenance import dump_directory, reset_directory

logger = logging.getLogger(__name__)


def _require_enabled():
    if not settings.DEBUG_ENDPOINTS_ENABLED:
        raise NotFound()


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def debug_users(request):
    _require_enabled()
    return Response(dump_directory())


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def reset_database(request):
    _require_enabled()
    counts = reset_directory()
    log_action(user=request.user, action='reset', detail={'deleted': counts}, request=request)
    return Response({'success': True, 'message': 'Database reset', 'deleted': counts})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def geocode_existing(request):
    _require_enabled()
    donors_ok, donors_failed = geocode_missing(Donor, address_of=lambda d: d.full_address)
    hospitals_ok, hospitals_failed = geocode_missing(Hospital, address_of=lambda h: h.full_address)
    logger.info('Geocode backfill: donors %s/%s, hospitals %s/%s',
                donors_ok, donors_failed, hospitals_ok, hospitals_failed)
    return Response({
        'success': True,
        'donors': {'updated': donors_ok, 'failed': donors_failed},
        'hospitals': {'updated': hospitals_ok, 'failed': hospitals_failed},
    })
