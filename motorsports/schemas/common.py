"""Shared schema building blocks: camelCase models, the response envelope
and the enumeration validator used by every request schema."""
import enum
from typing import Any, Generic, Iterable, Optional, Type, TypeVar, Union

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated

T = TypeVar("T")


def _not_blank(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("blank_string", "must not be empty")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Required text: an empty or whitespace-only string counts as missing
NonEmptyStr = Annotated[str, AfterValidator(_not_blank)]

# Optional text where an empty string means "not set"
BlankAsNone = Annotated[Optional[str], BeforeValidator(_blank_to_none)]


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    """Base for request bodies - unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid")


class ApiResponse(CamelModel, Generic[T]):
    """Uniform response envelope: { success, data?, error?, message?, count? }."""
    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None
    count: Optional[int] = None

    @model_serializer(mode="wrap")
    def _drop_absent_keys(self, handler):
        # Only top-level keys are dropped; nulls inside data are kept
        payload = handler(self)
        return {key: value for key, value in payload.items() if value is not None}


def enum_values(choices: Union[Type[enum.Enum], Iterable[Any]]) -> list[str]:
    """Accepted values of an enum class (or plain iterable) in declared order."""
    return [c.value if isinstance(c, enum.Enum) else c for c in choices]


def check_choice(value: Any, choices: Union[Type[enum.Enum], Iterable[Any]], field: str) -> Any:
    """Exact-match membership check.

    No trimming or case folding. The error message lists every accepted
    value so API consumers can correct the request.
    """
    allowed = enum_values(choices)
    if value not in allowed:
        raise ValueError(f"Invalid {field}. Must be one of: {', '.join(allowed)}")
    return value


def check_optional_choice(value: Any, choices, field: str) -> Any:
    if value is None:
        return value
    return check_choice(value, choices, field)


def check_non_negative(value: Optional[float], field: str) -> Optional[float]:
    if value is not None and value < 0:
        raise ValueError(f"{field} must be 0 or greater")
    return value


def update_fields(update: BaseModel, clearable: Iterable[str] = ()) -> dict:
    """Fields explicitly present in an update body.

    An explicit null is kept only for ``clearable`` (nullable) fields; for
    required columns it is treated as "not sent".
    """
    clearable = set(clearable)
    return {
        field: value
        for field, value in update.model_dump(exclude_unset=True).items()
        if value is not None or field in clearable
    }
