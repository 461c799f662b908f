"""Tests for the cross-process transfer payload."""

from __future__ import annotations

import json

import pytest

from whenny.core.models import TimeValue
from whenny.core.transfer import (
    TransferPayload,
    create_transfer,
    day_bounds_in_origin,
    from_transfer,
    is_transfer_payload,
)
from whenny.errors import InvalidTransferPayloadError, MissingTimezoneContextError

WIRE = {"iso": "2024-01-15T15:30:00.000Z", "originZone": "America/New_York", "originOffset": -300}


class TestCreateTransfer:
    def test_wire_format(self):
        payload = create_transfer(TimeValue.from_iso("2024-01-15T15:30:00Z"), "America/New_York")
        assert payload.to_wire() == WIRE

    def test_json_uses_camel_case_keys(self):
        payload = create_transfer("2024-01-15T15:30:00Z", "America/New_York")
        assert json.loads(payload.to_json()) == WIRE


class TestFromTransfer:
    """Decoding keeps the instant and carries the origin metadata."""

    @pytest.mark.parametrize("payload", [WIRE, json.dumps(WIRE), TransferPayload.model_validate(WIRE)])
    def test_accepts_dict_json_and_model(self, payload):
        value = from_transfer(payload)
        assert value.to_iso() == "2024-01-15T15:30:00.000Z"
        assert value.origin_zone == "America/New_York"
        assert value.origin_offset_minutes == -300

    def test_invalid_iso(self):
        with pytest.raises(InvalidTransferPayloadError):
            from_transfer({**WIRE, "iso": "yesterday"})

    def test_missing_field(self):
        with pytest.raises(InvalidTransferPayloadError):
            from_transfer({"iso": WIRE["iso"]})

    def test_unknown_zone(self):
        with pytest.raises(InvalidTransferPayloadError):
            from_transfer({**WIRE, "originZone": "Mars/Olympus"})

    def test_bad_json(self):
        with pytest.raises(InvalidTransferPayloadError):
            from_transfer("{not json")

    def test_offset_out_of_range(self):
        with pytest.raises(InvalidTransferPayloadError):
            from_transfer({**WIRE, "originOffset": 5000})


class TestPayloadDetection:
    def test_detects_wire_dict(self):
        assert is_transfer_payload(WIRE)

    def test_rejects_partial_dict(self):
        assert not is_transfer_payload({"iso": WIRE["iso"], "originZone": "UTC"})

    def test_rejects_bool_offset(self):
        assert not is_transfer_payload({**WIRE, "originOffset": True})


class TestDayBounds:
    def test_bounds_follow_origin_day(self):
        # 03:00 UTC on the 15th is still the 14th in New York
        value = TimeValue.from_iso("2024-01-15T03:00:00Z").with_origin("America/New_York")
        start, end = day_bounds_in_origin(value)
        assert start.to_iso() == "2024-01-14T05:00:00.000Z"
        assert end.to_iso() == "2024-01-15T04:59:59.999Z"
        assert start.origin_zone == "America/New_York"

    def test_requires_origin_zone(self):
        with pytest.raises(MissingTimezoneContextError):
            day_bounds_in_origin(TimeValue.from_iso("2024-01-15T03:00:00Z"))
