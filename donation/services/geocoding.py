"""
Address geocoding through the Google Geocoding API.

Results are kept in the Django cache keyed by a digest of the literal
address string, with ``GEOCODE_CACHE_TTL`` expiry.  With the default
locmem backend the cache is per-process and culled at ``MAX_ENTRIES``;
with ``REDIS_URL`` set it is shared between workers.  Failed lookups are
not cached.
"""
from __future__ import annotations

import hashlib
import logging
from typing import Optional

import requests
from django.conf import settings
from django.core.cache import cache

from donation.services.matching import Coordinate

logger = logging.getLogger(__name__)

CACHE_PREFIX = 'geocode:'


def _cache_key(address: str) -> str:
    return CACHE_PREFIX + hashlib.sha256(address.encode('utf-8')).hexdigest()


def geocode_address(address: str) -> Optional[Coordinate]:
    """Translate a postal address to a :class:`Coordinate`, or ``None``."""
    address = (address or '').strip()
    if not address:
        return None

    key = _cache_key(address)
    cached = cache.get(key)
    if cached is not None:
        return Coordinate(*cached)

    api_key = settings.GOOGLE_MAPS_API_KEY
    if not api_key:
        logger.warning('GOOGLE_MAPS_API_KEY not set; cannot geocode %r', address)
        return None

    try:
        r = requests.get(
            settings.GEOCODING_URL,
            params={'address': address, 'key': api_key},
            timeout=settings.GEOCODING_TIMEOUT,
        )
        r.raise_for_status()
        data = r.json()
    except (requests.RequestException, ValueError) as e:
        logger.error('Geocoding request failed for %r: %s', address, e)
        return None

    results = data.get('results') or []
    if data.get('status') != 'OK' or not results:
        logger.warning('Geocoding failed for %r: %s', address, data.get('status'))
        return None

    loc = results[0]['geometry']['location']
    coordinate = Coordinate(latitude=float(loc['lat']), longitude=float(loc['lng']))
    cache.set(key, (coordinate.latitude, coordinate.longitude), settings.GEOCODE_CACHE_TTL)
    return coordinate


def geocode_missing(model, *, address_of) -> tuple[int, int]:
    """Fill in coordinates for rows of ``model`` that lack them.

    ``address_of`` builds the address string for one row.  Returns
    ``(updated, failed)``; rows that cannot be geocoded are left as they
    are.
    """
    from django.db.models import Q

    updated = failed = 0
    for obj in model.objects.filter(Q(latitude__isnull=True) | Q(longitude__isnull=True)):
        coordinate = geocode_address(address_of(obj))
        if coordinate is None:
            failed += 1
            continue
        obj.latitude = coordinate.latitude
        obj.longitude = coordinate.longitude
        obj.save(update_fields=['latitude', 'longitude', 'updated_at'])
        logger.info('Geocoded %s #%s -> %s, %s', model.__name__, obj.pk, coordinate.latitude, coordinate.longitude)
        updated += 1
    return updated, failed
