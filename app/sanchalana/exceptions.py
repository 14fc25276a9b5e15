"""
Domain exceptions for the Sanchalana backend
============================================

Controllers raise these; routes turn them into the error envelope from
``sanchalana.response_model``.

Usage:
    from sanchalana.exceptions import NotFoundError

    if not event:
        raise NotFoundError("Event", event_id)
"""

from typing import Any, Dict, Optional


class FestError(Exception):
    """Base exception for all Sanchalana errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationError(FestError):
    """Caller could not be authenticated"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class PermissionDeniedError(FestError):
    """Caller is authenticated but not allowed to perform the action"""

    status_code = 403

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, code="PERMISSION_DENIED")


class NotFoundError(FestError):
    status_code = 404

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found" if identifier is None else f"{resource} {identifier} not found"
        super().__init__(message, code="NOT_FOUND", details={"resource": resource})


class ValidationError(FestError):
    """Input rejected before it reaches the database"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR", details={"field": field} if field else None)


class ConflictError(FestError):
    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


class DeliveryError(FestError):
    """An outbound message (e-mail) could not be delivered"""

    status_code = 502

    def __init__(self, message: str):
        super().__init__(message, code="DELIVERY_FAILED")
