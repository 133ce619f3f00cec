"""
DRF exception handler.

Domain exceptions are rendered as ``{"detail", "error", ...details}`` with
the status code of their kind; everything else goes through DRF's default
handler.
"""

import logging

from django.db import IntegrityError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from domain.shared.exceptions import (
    ConcurrencyException,
    DomainException,
    DuplicateKeyException,
    EntityAlreadyExistsException,
    EntityNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


DOMAIN_STATUS = (
    (ValidationException, status.HTTP_400_BAD_REQUEST),
    (EntityNotFoundException, status.HTTP_404_NOT_FOUND),
    (DuplicateKeyException, status.HTTP_409_CONFLICT),
    (EntityAlreadyExistsException, status.HTTP_409_CONFLICT),
    (ConcurrencyException, status.HTTP_409_CONFLICT),
)


def domain_status(exc: DomainException) -> int:
    for exc_class, status_code in DOMAIN_STATUS:
        if isinstance(exc, exc_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def custom_exception_handler(exc, context):
    """
    Map domain and integrity errors to HTTP responses.
    """
    if isinstance(exc, DomainException):
        status_code = domain_status(exc)
        view = context.get('view')
        logger.info(
            f"{exc.code} in {view.__class__.__name__ if view else 'view'}: {exc.message}"
        )
        body = {key: value for key, value in exc.details.items() if value is not None}
        body.update({
            'detail': exc.message,
            'error': exc.code.lower(),
        })
        return Response(body, status=status_code)

    if isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error outside unique keys: {exc}")
        return Response(
            {
                'detail': '데이터 무결성 제약 조건을 위반했습니다.',
                'error': 'integrity_error',
            },
            status=status.HTTP_409_CONFLICT,
        )

    return exception_handler(exc, context)
