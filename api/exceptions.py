"""
DRF exception handler for application exceptions.

Maps the core.exceptions hierarchy onto HTTP responses with a
{"detail", "code", "details"} body. Everything else falls through to DRF.
"""
import logging
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import (
    BaseApplicationException, ValidationError, NotAuthenticatedError,
    StorageError, NotFoundError, PermissionDeniedError, BusinessLogicError
)

logger = logging.getLogger(__name__)

STATUS_MAP = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (BusinessLogicError, status.HTTP_409_CONFLICT),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: BaseApplicationException) -> int:
    for exc_class, status_code in STATUS_MAP:
        if isinstance(exc, exc_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def app_exception_handler(exc, context):
    """Custom EXCEPTION_HANDLER for REST_FRAMEWORK settings"""
    if not isinstance(exc, BaseApplicationException):
        return exception_handler(exc, context)

    status_code = status_for(exc)
    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else 'unknown'
    if status_code >= 500:
        logger.error(f"{exc.__class__.__name__} in {view_name}: {exc.message}", exc_info=exc)
    else:
        logger.info(f"{exc.__class__.__name__} in {view_name}: {exc.code}")

    return Response(
        {'detail': exc.message, 'code': exc.code, 'details': exc.details},
        status=status_code
    )
