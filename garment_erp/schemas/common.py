"""
Garment ERP Common Schemas
Shared Pydantic types and small response models
"""
from decimal import Decimal
from typing import Optional
import re

from pydantic import AfterValidator, BaseModel, Field, PlainSerializer
from typing_extensions import Annotated

# Decimals travel as JSON numbers, not strings
Quantity = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]

MOBILE_PATTERN = re.compile(r"^\d{10}$")
PINCODE_PATTERN = re.compile(r"^\d{6}$")
EMAIL_PATTERN = re.compile(r"^[\w.-]+@[\w.-]+\.[A-Za-z]{2,}$")


def validate_mobile(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not MOBILE_PATTERN.match(value):
        raise ValueError("Mobile number must be exactly 10 digits")
    return value


def validate_pincode(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    value = value.strip()
    if not PINCODE_PATTERN.match(value):
        raise ValueError("Pincode must be exactly 6 digits")
    return value


def validate_email(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


class MessageResponse(BaseModel):
    """Response for operations that return no record"""
    message: str = Field(..., description="Human-readable result")


class ErrorResponse(BaseModel):
    """
    Standard error response model

    Rendered by the exception handlers in main.py
    """
    error: str = Field(..., description="Error category")
    detail: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Conflict",
                "detail": "Store Entry already exists for this purchase",
                "type": "conflict"
            }
        }
    }


MobileNumber = Annotated[str, AfterValidator(validate_mobile)]
OptionalMobileNumber = Annotated[Optional[str], AfterValidator(validate_mobile)]
Pincode = Annotated[Optional[str], AfterValidator(validate_pincode)]
ContactEmail = Annotated[Optional[str], AfterValidator(validate_email)]
