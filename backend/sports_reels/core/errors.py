"""
Custom error classes and error handling.
"""
from typing import Any, Dict, Optional


class APIError(Exception):
    """Base API error class."""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {'error': self.message}


class ValidationError(APIError):
    """Invalid request payload."""
    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status_code=400)


class AuthenticationError(APIError):
    """Authentication error."""
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)


class AuthorizationError(APIError):
    """Authorization error."""
    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, status_code=403)


class NotFoundError(APIError):
    """Resource not found error."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ConflictError(APIError):
    """Request conflicts with the current state of the resource."""
    def __init__(self, message: str = "Conflict"):
        super().__init__(message, status_code=409)


class InvalidTransitionError(ConflictError):
    """A status field was asked to move backwards or sideways."""
    def __init__(self, flow: str, current: str, target: str):
        self.flow = flow
        self.current = current
        self.target = target
        super().__init__(f"Cannot change {flow} status from '{current}' to '{target}'")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'error': self.message,
            'current_status': self.current,
            'requested_status': self.target,
        }


class InsufficientTokensError(APIError):
    """Token balance does not cover the cost of an action."""
    def __init__(self, current_balance: int = 0, required: Optional[int] = None,
                 message: str = "Insufficient tokens"):
        self.current_balance = current_balance
        self.required = required
        super().__init__(message, status_code=400)

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            'error': self.message,
            'needs_purchase': True,
            'current_balance': self.current_balance,
        }
        if self.required is not None:
            payload['required'] = self.required
        return payload


class ServiceUnavailableError(APIError):
    """A backing service (LLM, object storage) is not configured or reachable."""
    def __init__(self, message: str = "Service unavailable"):
        super().__init__(message, status_code=503)
