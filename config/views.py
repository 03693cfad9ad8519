import logging

from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.core.exceptions import DomainError


logger = logging.getLogger('apps.api')


DOMAIN_ERROR_STATUS = {
    'not_found': status.HTTP_404_NOT_FOUND,
    'bad_request': status.HTTP_400_BAD_REQUEST,
    'forbidden': status.HTTP_403_FORBIDDEN,
    'scheduling_conflict': status.HTTP_409_CONFLICT,
    'invalid_transition': status.HTTP_409_CONFLICT,
    'expired': status.HTTP_403_FORBIDDEN,
}


def api_exception_handler(exc, context):
    """
    DRF exception handler that renders domain errors.

    Domain errors raised by the service layer carry a stable ``kind``;
    it is mapped to an HTTP status here. Anything else is left to DRF.
    """
    if isinstance(exc, DomainError):
        status_code = DOMAIN_ERROR_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST)
        logger.info("Domain error %s: %s", exc.kind, exc.message)
        return Response(
            {'error': exc.message, 'kind': exc.kind},
            status=status_code
        )

    return exception_handler(exc, context)


def health_check(request):
    """Liveness probe."""
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
