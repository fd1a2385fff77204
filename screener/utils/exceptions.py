"""
Custom Exception Classes for the Resume Screening Trainer API
"""
from typing import Dict, Any
from fastapi import HTTPException


class ScreenerBaseException(Exception):
    """Base exception for the screening API"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/response"""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ValidationError(ScreenerBaseException):
    """Raised when request data validation fails"""

    def __init__(self, message: str, field: str = None, value: Any = None, **kwargs):
        details = kwargs.pop('details', {})
        if field:
            details['field'] = field
        if value is not None:
            details['invalid_value'] = str(value)
        super().__init__(message, error_code="VALIDATION_ERROR", details=details, **kwargs)


class DatabaseError(ScreenerBaseException):
    """Raised when database operations fail"""

    def __init__(self, message: str, operation: str = None, collection: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if operation:
            details['operation'] = operation
        if collection:
            details['collection'] = collection
        super().__init__(message, error_code="DATABASE_ERROR", details=details, **kwargs)


class ConfigurationError(ScreenerBaseException):
    """Raised when startup configuration is invalid or missing"""

    def __init__(self, message: str, config_key: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if config_key:
            details['config_key'] = config_key
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details, **kwargs)


class NotFoundError(ScreenerBaseException):
    """Raised when a requested record does not exist"""

    def __init__(self, message: str, resource: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if resource:
            details['resource'] = resource
        super().__init__(message, error_code="NOT_FOUND", details=details, **kwargs)


class GatewayError(ScreenerBaseException):
    """Base class for failures talking to the LLM gateway"""

    status_code = 500

    def __init__(self, message: str, status_code: int = None, body: str = None, error_code: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if status_code is not None:
            self.status_code = status_code
            details['upstream_status'] = status_code
        if body:
            details['upstream_body'] = body[:1000]
        super().__init__(message, error_code=error_code or "GATEWAY_ERROR", details=details, **kwargs)

    @property
    def fallback_eligible(self) -> bool:
        return False


class RateLimitError(GatewayError):
    """Gateway answered 429"""

    def __init__(self, message: str = "Rate limit exceeded. Please try again later.", **kwargs):
        super().__init__(message, status_code=429, error_code="RATE_LIMIT_ERROR", **kwargs)

    @property
    def fallback_eligible(self) -> bool:
        return True


class PaymentRequiredError(GatewayError):
    """Gateway answered 402"""

    def __init__(self, message: str = "Payment required. Please add credits to your workspace.", **kwargs):
        super().__init__(message, status_code=402, error_code="PAYMENT_REQUIRED", **kwargs)

    @property
    def fallback_eligible(self) -> bool:
        return True


class UpstreamUnavailableError(GatewayError):
    """Gateway answered >= 500 or could not be reached"""

    def __init__(self, message: str = "AI service temporarily unavailable", status_code: int = None, **kwargs):
        super().__init__(message, status_code=status_code, error_code="UPSTREAM_UNAVAILABLE", **kwargs)

    @property
    def fallback_eligible(self) -> bool:
        return True


class AnalysisFailedError(GatewayError):
    """Gateway answered 2xx without a usable structured payload"""

    def __init__(self, message: str = "AI analysis failed", **kwargs):
        super().__init__(message, error_code="ANALYSIS_FAILED", **kwargs)


class UpstreamError(GatewayError):
    """Any other non-2xx gateway answer, propagated with its status"""

    def __init__(self, message: str, status_code: int, **kwargs):
        super().__init__(message, status_code=status_code, error_code="UPSTREAM_ERROR", **kwargs)


# HTTP Exception Mapping
def map_to_http_exception(exc: ScreenerBaseException) -> HTTPException:
    """Map custom exceptions to HTTP exceptions"""

    status_code_mapping = {
        ValidationError: 400,
        NotFoundError: 404,
        ConfigurationError: 500,
        DatabaseError: 500,
    }

    if isinstance(exc, GatewayError):
        status_code = exc.status_code
        # Unavailable upstream surfaces as a plain server error to our caller
        if isinstance(exc, UpstreamUnavailableError):
            status_code = 500
    else:
        status_code = status_code_mapping.get(type(exc), 500)

    detail = {
        "error": exc.message,
        "error_code": exc.error_code,
        "details": exc.details,
    }

    return HTTPException(status_code=status_code, detail=detail)
