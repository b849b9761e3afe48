"""
Push urgency changes to connected dashboards over Channels.

Consumers in the ``urgency`` group receive ``urgency.changed`` events
(see ``donation.realtime.consumers``).  Delivery is best effort: a
missing or unreachable channel layer is logged and does not fail the
request that triggered it.
"""
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.utils import timezone

logger = logging.getLogger(__name__)

URGENCY_GROUP = 'urgency'


def notify_urgency(kind: str, payload: dict) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    event = {
        'type': 'urgency.changed',
        'kind': kind,
        'ts': timezone.now().isoformat(),
        'data': payload,
    }
    try:
        async_to_sync(channel_layer.group_send)(URGENCY_GROUP, event)
    except (OSError, RuntimeError) as e:
        logger.warning('Urgency broadcast failed (%s): %s', kind, e)
