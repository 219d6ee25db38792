"""Shared schema base, annotated field types and catalog-coded validation errors."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, WrapValidator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from flatshare.errors import ErrorCode
from flatshare.models.expense import is_whole_cents


class CamelModel(BaseModel):
    """JSON uses camelCase; Python code uses snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserSummary(CamelModel):
    id: str
    email: str
    name: str


class OkResponse(BaseModel):
    ok: bool = True


def invalid(code: ErrorCode) -> PydanticCustomError:
    """A validation error whose type is the catalog code; the boundary renders the message."""
    return PydanticCustomError(code.value, code.name)


def reraise_as(code: ErrorCode) -> WrapValidator:
    """Run the default validation, replacing any failure with a catalog-coded one."""

    def validator(value, handler):
        try:
            return handler(value)
        except PydanticValidationError:
            raise invalid(code)

    return WrapValidator(validator)


def min_length(length: int, code: ErrorCode, strip: bool = True) -> AfterValidator:
    """Require at least ``length`` characters, stripping surrounding whitespace first by default."""

    def validator(value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if strip:
            value = value.strip()
        if len(value) < length:
            raise invalid(code)
        return value

    return AfterValidator(validator)


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise invalid(ErrorCode.VALIDATION_EMAIL_INVALID)
    return value.strip().lower()


def _check_amount(value: Decimal) -> Decimal:
    if value <= 0:
        raise invalid(ErrorCode.EXPENSE_AMOUNT_INVALID)
    if not is_whole_cents(value):
        raise invalid(ErrorCode.EXPENSE_AMOUNT_TOO_PRECISE)
    return value


Email = Annotated[str, reraise_as(ErrorCode.VALIDATION_EMAIL_INVALID), AfterValidator(_check_email)]
RequiredId = Annotated[str, min_length(1, ErrorCode.VALIDATION_FIELD_REQUIRED)]
IsoDate = Annotated[datetime, reraise_as(ErrorCode.VALIDATION_DATE_INVALID)]
Amount = Annotated[Decimal, reraise_as(ErrorCode.EXPENSE_AMOUNT_REQUIRED), AfterValidator(_check_amount)]
