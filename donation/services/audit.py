"""
Audit trail for account and administrative actions.
"""
from typing import Any, Dict, Optional

from donation.models import AuditEvent


def client_ip(request) -> Optional[str]:
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def log_action(*, user, action: str, object_type: Optional[str] = None, object_id: Optional[int] = None,
               detail: Optional[Dict[str, Any]] = None, request=None) -> AuditEvent:
    """Record an audit row.

    Anonymous callers (failed logins) are stored with ``user=None``.  When
    ``request`` is given the client address is added to ``detail['ip']``.
    """
    detail = dict(detail or {})
    if request is not None:
        detail.setdefault('ip', client_ip(request))
    return AuditEvent.objects.create(
        user=user if getattr(user, 'pk', None) else None,
        action=action,
        object_type=object_type,
        object_id=object_id,
        detail=detail,
    )
