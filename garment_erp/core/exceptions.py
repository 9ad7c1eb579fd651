"""
Custom Application Exceptions

Services raise these; main.py renders them as {"error", "detail", "type"}
with the status code carried by the class.
"""
from fastapi import status


class GarmentERPException(Exception):
    """Base exception for the application"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type = "server_error"
    error = "Internal server error"

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail or self.error


class ValidationError(GarmentERPException):
    """Raised when data validation fails"""
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "validation_error"
    error = "Validation failed"


class ConflictError(GarmentERPException):
    """Raised when a record already exists or is referenced elsewhere"""
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "conflict"
    error = "Conflict"


class BusinessLogicError(GarmentERPException):
    """Raised when business rules are violated"""
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "business_rule"
    error = "Business rule violated"


class NotFoundError(GarmentERPException):
    """Raised when a requested record does not exist"""
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"
    error = "Not found"


class AuthenticationError(GarmentERPException):
    """Raised when credentials are missing or invalid"""
    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "authentication_error"
    error = "Not authenticated"


class InsufficientPermissionsError(GarmentERPException):
    """Raised when user lacks required permissions"""
    status_code = status.HTTP_403_FORBIDDEN
    error_type = "permission_denied"
    error = "Access denied"
