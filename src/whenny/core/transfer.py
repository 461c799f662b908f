"""Transfer protocol for moving time values between processes.

A payload keeps the instant (as a UTC ISO string) together with the zone it
was captured in, so a receiver can still answer "which day was that for the
user?" after the value has crossed the wire.

Wire format::

    {"iso": "2024-01-15T15:30:00.000Z", "originZone": "America/New_York", "originOffset": -300}
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from whenny.core.calendar import end_of, start_of
from whenny.core.models import TimeInput, TimeValue, coerce_time_value
from whenny.core.timezone import DEFAULT_RESOLVER, ZoneResolver, to_epoch_millis
from whenny.errors import (
    InvalidDateStringError,
    InvalidTransferPayloadError,
    MissingTimezoneContextError,
)

logger = logging.getLogger(__name__)


class TransferPayload(BaseModel):
    """Serialized time value with origin timezone context."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    iso: str = Field(..., description="Instant as a UTC ISO 8601 string")
    origin_zone: str = Field(..., alias="originZone", description="IANA zone of origin")
    origin_offset: int = Field(..., alias="originOffset", description="UTC offset in minutes at the instant")

    @field_validator("iso")
    def _validate_iso(cls, value: str) -> str:
        try:
            TimeValue.from_iso(value)
        except InvalidDateStringError as exc:
            raise ValueError(exc.message) from exc
        return value

    @field_validator("origin_offset")
    def _validate_offset(cls, value: int) -> int:
        if not -18 * 60 <= value <= 18 * 60:
            raise ValueError("originOffset must be within +/-18 hours")
        return value

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        return json.dumps(self.to_wire())


PayloadInput = Union[TransferPayload, Dict[str, Any], str]


def create_transfer(
    value: TimeInput,
    zone_id: str,
    *,
    resolver: Optional[ZoneResolver] = None,
) -> TransferPayload:
    """Capture ``value`` along with the zone it should be read in."""
    resolver = resolver or DEFAULT_RESOLVER
    time_value = coerce_time_value(value)
    offset = resolver.offset_minutes(zone_id, time_value.instant_millis)
    return TransferPayload(iso=time_value.to_iso(), originZone=zone_id, originOffset=offset)


def from_transfer(payload: PayloadInput, *, resolver: Optional[ZoneResolver] = None) -> TimeValue:
    """Decode a payload into a ``TimeValue`` carrying its origin metadata."""
    resolver = resolver or DEFAULT_RESOLVER
    model = _coerce_payload(payload)
    if not resolver.is_valid_zone(model.origin_zone):
        raise InvalidTransferPayloadError(
            f"Unknown originZone: {model.origin_zone!r}",
            input=model.to_wire(),
        )
    instant = TimeValue.from_iso(model.iso)
    return TimeValue(instant.instant_millis, model.origin_zone, model.origin_offset)


def is_transfer_payload(obj: Any) -> bool:
    if isinstance(obj, TransferPayload):
        return True
    if not isinstance(obj, dict):
        return False
    return (
        isinstance(obj.get("iso"), str)
        and isinstance(obj.get("originZone"), str)
        and isinstance(obj.get("originOffset"), int)
        and not isinstance(obj.get("originOffset"), bool)
    )


def day_bounds_in_origin(
    value: TimeValue,
    *,
    resolver: Optional[ZoneResolver] = None,
) -> Tuple[TimeValue, TimeValue]:
    """Start and end (last millisecond) of the origin-zone day holding ``value``."""
    if not value.origin_zone:
        raise MissingTimezoneContextError(
            "Day bounds need the value's origin timezone",
            input=value.to_iso(),
        )
    resolver = resolver or DEFAULT_RESOLVER
    wall = value.to_datetime(value.origin_zone, resolver=resolver)
    first = start_of(wall, "day")
    last = end_of(wall, "day")
    return (
        TimeValue(to_epoch_millis(first), value.origin_zone, resolver.offset_minutes(value.origin_zone, to_epoch_millis(first))),
        TimeValue(to_epoch_millis(last), value.origin_zone, resolver.offset_minutes(value.origin_zone, to_epoch_millis(last))),
    )


def _coerce_payload(payload: PayloadInput) -> TransferPayload:
    if isinstance(payload, TransferPayload):
        return payload
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise InvalidTransferPayloadError(f"Payload is not valid JSON: {exc}", input=payload) from exc
    if not isinstance(payload, dict):
        raise InvalidTransferPayloadError("Payload must be an object", input=payload)
    try:
        return TransferPayload.model_validate(payload)
    except ValidationError as exc:
        logger.debug("Rejected transfer payload: %s", exc)
        raise InvalidTransferPayloadError(f"Invalid transfer payload: {exc}", input=payload) from exc


__all__ = [
    "PayloadInput",
    "TransferPayload",
    "create_transfer",
    "day_bounds_in_origin",
    "from_transfer",
    "is_transfer_payload",
]
