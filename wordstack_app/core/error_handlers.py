"""
Error Handlers for WordStack

Provides:
- The exception taxonomy shared by every module
- Consistent error response format
- Flask error handlers
"""

from typing import Any, Dict, Optional

from flask import current_app, jsonify, request
from marshmallow import ValidationError


class WordStackError(Exception):
    """Base exception class for WordStack."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for JSON response."""
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class InvalidArgumentError(WordStackError):
    """Malformed caller input."""

    def __init__(self, message: str = 'Invalid argument', errors: Dict = None):
        super().__init__(
            message=message,
            code='INVALID_ARGUMENT',
            status_code=400,
            details={'errors': errors} if errors else None
        )


class ForbiddenError(WordStackError):
    """The entity exists but belongs to someone else."""

    def __init__(self, message: str = 'Access denied'):
        super().__init__(
            message=message,
            code='FORBIDDEN',
            status_code=403
        )


class NotFoundError(WordStackError):
    """Resource not found."""

    def __init__(self, message: str = 'Resource not found', resource: str = None):
        super().__init__(
            message=message,
            code='NOT_FOUND',
            status_code=404,
            details={'resource': resource} if resource else None
        )


class ConflictError(WordStackError):
    """A unique-constrained record already exists."""

    def __init__(self, message: str = 'Resource already exists'):
        super().__init__(
            message=message,
            code='CONFLICT',
            status_code=409
        )


class InvalidWordError(WordStackError):
    """The completion provider could not recognize the input as a word."""

    def __init__(self, spelling: str):
        super().__init__(
            message=f"'{spelling}' is not a recognizable word, please check the spelling.",
            code='INVALID_WORD',
            status_code=422,
            details={'spelling': spelling}
        )


class UpstreamError(WordStackError):
    """The provider call failed or returned unusable content."""

    def __init__(
        self,
        message: str = 'Upstream provider failed',
        code: str = 'UPSTREAM_ERROR',
        raw_response: Optional[str] = None
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=502,
            details={'raw_response': raw_response} if raw_response else None
        )


class StorageBusyError(WordStackError):
    """The database stayed locked; the write was rolled back and can be retried."""

    def __init__(self, message: str = 'The database is busy, please retry'):
        super().__init__(
            message=message,
            code='STORAGE_BUSY',
            status_code=503
        )


class GenerationFailedError(UpstreamError):
    """Article or image generation could not be completed."""

    def __init__(self, message: str = 'Generation failed', raw_response: Optional[str] = None):
        super().__init__(message=message, code='GENERATION_FAILED', raw_response=raw_response)


def error_response(
    message: str,
    code: str = 'ERROR',
    status_code: int = 400,
    details: Dict = None
) -> tuple:
    """Create a standardized error response."""
    response = {
        'success': False,
        'message': message,
        'code': code
    }
    if details:
        response['details'] = details

    return jsonify(response), status_code


def success_response(data: Any = None, message: str = None) -> dict:
    """Create a standardized success response."""
    response = {'success': True}
    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message
    return response


def register_error_handlers(app):
    """Register error handlers with Flask app."""

    @app.errorhandler(WordStackError)
    def handle_wordstack_error(error):
        if error.status_code >= 500:
            current_app.logger.error(f"{error.code}: {error.message}")
        else:
            current_app.logger.info(f"{error.code}: {error.message}")
        payload = error.to_dict()
        # Raw provider output is for the logs, not for end users.
        payload['details'] = {k: v for k, v in payload['details'].items() if k != 'raw_response'}
        return jsonify(payload), error.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return error_response('Validation failed', 'INVALID_ARGUMENT', 400, {'errors': error.messages})

    @app.errorhandler(404)
    def handle_not_found(error):
        if request.path.startswith('/api/'):
            return error_response('Endpoint not found', 'NOT_FOUND', 404)
        return error

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        if request.path.startswith('/api/'):
            return error_response('Method not allowed', 'METHOD_NOT_ALLOWED', 405)
        return error

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception('Internal server error')
        if request.path.startswith('/api/'):
            return error_response('Internal server error', 'SERVER_ERROR', 500)
        return error
