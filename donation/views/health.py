from django.db import connections
from django.http import JsonResponse
from django.utils import timezone


def healthz(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        return JsonResponse({
            'ok': True,
            'status': 'OK',
            'db': bool(row and row[0] == 1),
            'timestamp': timezone.now().isoformat(),
        })
    except Exception as e:
        return JsonResponse({
            'ok': False,
            'status': 'ERROR',
            'message': 'Server running but database connection failed',
            'error': str(e),
        }, status=503)
