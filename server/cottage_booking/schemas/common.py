"""Common Pydantic schemas and the response envelope."""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def _parse_day(value: Any) -> Any:
    """Accept dates, datetimes and ISO strings; keep only the UTC calendar day."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"'{value}' is not an ISO 8601 date") from e
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


# Calendar day parsed from a date or datetime, time of day dropped
Day = Annotated[date, BeforeValidator(_parse_day)]

# Money travels as a JSON number
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base schema speaking the camelCase field names of the booking clients."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def to_jsonable(data: Union[BaseModel, list, dict, None]) -> Any:
    """Dump schemas (or lists of them) the way they go over the wire."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [to_jsonable(item) for item in data]
    return data


def envelope(data: Any = None, message: Optional[str] = None) -> dict[str, Any]:
    """Successful response envelope: ``{"success": true, "data": ..., "message"?}``."""
    body = {"success": True, "data": to_jsonable(data)}
    if message:
        body["message"] = message
    return body
