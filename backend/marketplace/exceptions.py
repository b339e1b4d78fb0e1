import logging
from rest_framework import status, exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class NotFound(exceptions.NotFound):
    default_detail = 'Resource not found'


class Unauthorized(exceptions.PermissionDenied):
    default_detail = 'You are not allowed to perform this action'
    default_code = 'unauthorized'


class InvalidTransition(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid status transition'
    default_code = 'invalid_transition'


class InvalidOperation(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Operation not allowed'
    default_code = 'invalid_operation'


class NotRefundable(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Order is not refundable'
    default_code = 'not_refundable'


class AmountExceedsCapacity(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Refund amount cannot exceed order total'
    default_code = 'amount_exceeds_capacity'


def _first_message(errors):
    if isinstance(errors, (list, tuple)):
        return _first_message(errors[0]) if errors else 'Validation failed'
    if isinstance(errors, dict):
        for value in errors.values():
            return _first_message(value)
        return 'Validation failed'
    return str(errors)


def api_exception_handler(exc, context):
    """
    Render every error as {"message": ...}; validation errors also carry
    the field errors under "errors". Anything DRF does not know about is
    logged with its stack and turned into a 500.
    """
    response = exception_handler(exc, context)
    view = context.get('view')
    view_name = view.__class__.__name__ if view else 'unknown view'

    if response is None:
        logger.error(f"Unhandled error in {view_name}: {exc}", exc_info=exc)
        return Response(
            {'message': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if isinstance(exc, exceptions.ValidationError):
        errors = response.data
        if isinstance(errors, list):
            errors = {'non_field_errors': errors}
        response.data = {'message': _first_message(errors), 'errors': errors}
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'message': str(response.data['detail'])}
    else:
        response.data = {'message': _first_message(response.data)}

    return response
