"""Core time value model, timezone lookups and calendar arithmetic."""

from .models import TimeInput, TimeValue, coerce_time_value
from .timezone import ZoneResolver, common_zones, format_offset
from .transfer import (
    TransferPayload,
    create_transfer,
    day_bounds_in_origin,
    from_transfer,
    is_transfer_payload,
)

__all__ = [
    "TimeInput",
    "TimeValue",
    "TransferPayload",
    "ZoneResolver",
    "coerce_time_value",
    "common_zones",
    "create_transfer",
    "day_bounds_in_origin",
    "format_offset",
    "from_transfer",
    "is_transfer_payload",
]
