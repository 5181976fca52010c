"""
Shared pydantic building blocks for request and response bodies.

The wire format is camelCase; request bodies also accept snake_case.
"""

import re
from decimal import Decimal
from typing import Annotated, Any, Dict, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer, StringConstraints
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from app.core.errors import from_pydantic_errors

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Optional leading +, then digits and common separators
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-().]+$")
MIN_PHONE_DIGITS = 10
# Column widths of the phone and email columns
MAX_PHONE_LENGTH = 20
MAX_EMAIL_LENGTH = 255

# Money and percentages go out as JSON numbers
ApiDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float)]

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, populate by either name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


def check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValueError("must be a valid email address")
    return value.lower()


def check_phone(value: str) -> str:
    if not PHONE_PATTERN.match(value):
        raise ValueError("must contain only digits, an optional leading +, and separators")
    if sum(c.isdigit() for c in value) < MIN_PHONE_DIGITS:
        raise ValueError(f"must contain at least {MIN_PHONE_DIGITS} digits")
    return value


def check_not_blank(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("is required")
    return value


Email = Annotated[str, StringConstraints(max_length=MAX_EMAIL_LENGTH), AfterValidator(check_email)]
Phone = Annotated[str, StringConstraints(max_length=MAX_PHONE_LENGTH), AfterValidator(check_phone)]
RequiredStr = Annotated[str, AfterValidator(check_not_blank)]


def parse_fields(schema: Type[SchemaT], fields: Any) -> SchemaT:
    """
    Validate a dict (or an already-built schema) against `schema`.

    Raises the application ValidationError with field-level detail instead
    of pydantic's own exception.
    """
    if isinstance(fields, schema):
        return fields
    if isinstance(fields, BaseModel):
        fields = fields.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(fields or {})
    except PydanticValidationError as e:
        raise from_pydantic_errors(e.errors())


def supplied_fields(payload: BaseModel) -> Dict[str, Any]:
    """Fields the caller actually sent, by attribute name."""
    return payload.model_dump(exclude_unset=True)
