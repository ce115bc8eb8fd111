from rest_framework import exceptions, status


class Forbidden(exceptions.PermissionDenied):
    default_detail = 'Not authorized.'
    default_code = 'forbidden'


class NotFound(exceptions.NotFound):
    default_detail = 'Not found.'
    default_code = 'not_found'


class ValidationFailure(exceptions.ValidationError):
    default_detail = 'Invalid input.'
    default_code = 'validation_failure'


class InternalFailure(exceptions.APIException):
    """Persistence or unexpected fault. The detail never carries internals."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Server error.'
    default_code = 'internal_failure'
