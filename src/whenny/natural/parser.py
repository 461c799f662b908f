"""Natural-language date expressions.

Input is scanned left to right into clauses: at most one anchor ("tomorrow",
"next friday"), any number of offsets ("in 3 days") and boundaries ("end of
the month"), and at most one time of day ("at 3pm"). The clauses are folded
into an expression tree rooted at the anchor, then evaluated against the
reference instant in the requested zone:

    anchor (default now) -> offsets and boundaries in order -> time of day

Resource limits are checked before evaluation: over-long input is rejected
before it is tokenized and a tree nesting too many offset/boundary clauses is
rejected while it is being built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from dateutil import tz

from whenny.configuration.settings import NaturalSettings, WhennyConfig, get_config
from whenny.core.calendar import add_time, end_of, start_of, weekday_index
from whenny.core.models import TimeInput, TimeValue, coerce_time_value
from whenny.core.timezone import DEFAULT_RESOLVER, ZoneResolver, is_valid_instant, to_epoch_millis
from whenny.errors import (
    MAX_INPUT_LENGTH,
    MAX_PARSE_DEPTH,
    InputTooLongError,
    ParseDepthExceededError,
    ParseFailedError,
    WhennyError,
)
from whenny.natural.nodes import (
    Anchor,
    BoundaryOf,
    ExpressionNode,
    Offset,
    TimeOfDay,
    describe,
)
from whenny.natural.tokenizer import (
    CLOCK_RE,
    FILLER_WORDS,
    PERIOD_UNITS,
    QUALIFIERS,
    TIMES_OF_DAY,
    normalize,
    parse_number,
    parse_unit,
    parse_weekday,
    tokenize,
)

logger = logging.getLogger(__name__)


DAY_SHIFTS = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
    "day_after_tomorrow": 2,
    "day_before_yesterday": -2,
}

SIMPLE_ANCHORS = ("now", "today", "tonight", "tomorrow", "yesterday")
BOUNDARY_EDGES = {"start": "start", "beginning": "start", "end": "end"}
MERIDIEMS = ("am", "pm")


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a successful parse.

    ``confident`` is False for vague input such as "a few minutes ago" or a
    bare weekday. ``matched`` is the normalized text that was understood.
    """

    value: TimeValue
    confident: bool
    matched: str
    node: ExpressionNode


class _ClauseScanner:
    """Consume words into clauses, tracking nesting as modifiers are added."""

    def __init__(self, text: str, words: List[str], natural: NaturalSettings) -> None:
        self.text = text
        self.words = words
        self.natural = natural
        self.pos = 0
        self.anchor: Optional[Anchor] = None
        self.modifiers: List[Tuple] = []
        self.time: Optional[Tuple[int, int]] = None
        self.confident = True

    def peek(self, ahead: int = 0) -> str:
        index = self.pos + ahead
        return self.words[index] if index < len(self.words) else ""

    def scan(self) -> ExpressionNode:
        while self.pos < len(self.words):
            if self.peek() in FILLER_WORDS:
                self.pos += 1
                continue
            start = self.pos
            if not (self._boundary() or self._offset() or self._time() or self._anchor()):
                raise ParseFailedError(self.text, unmatched=" ".join(self.words[start:]))
        if self.anchor is None and not self.modifiers and self.time is None:
            raise ParseFailedError(self.text)
        return self.build()

    def build(self) -> ExpressionNode:
        node: ExpressionNode = self.anchor or Anchor("now")
        for kind, *args in self.modifiers:
            node = Offset(node, *args) if kind == "offset" else BoundaryOf(node, *args)
        if self.time is not None:
            node = TimeOfDay(node, *self.time)
        return node

    def _add_modifier(self, modifier: Tuple) -> None:
        self.modifiers.append(modifier)
        if len(self.modifiers) > MAX_PARSE_DEPTH:
            raise ParseDepthExceededError(self.text, len(self.modifiers), MAX_PARSE_DEPTH)

    def _set_anchor(self, anchor: Anchor, width: int) -> bool:
        if self.anchor is not None:
            return False
        self.anchor = anchor
        self.pos += width
        return True

    def _set_time(self, hour: int, minute: int, width: int) -> bool:
        if self.time is not None:
            return False
        self.time = (hour, minute)
        self.pos += width
        return True

    # -- clauses ----------------------------------------------------------

    def _quantity(self, ahead: int) -> Optional[Tuple[int, int, bool]]:
        """(amount, words used, confident) for a count at ``ahead``."""
        if self.peek(ahead) == "a" and self.peek(ahead + 1) == "few":
            return 3, 2, False
        amount = parse_number(self.peek(ahead))
        if amount is None:
            return None
        return amount, 1, True

    def _offset(self) -> bool:
        leading = 1 if self.peek() == "in" else 0
        quantity = self._quantity(leading)
        if quantity is None:
            return False
        amount, used, confident = quantity
        unit = parse_unit(self.peek(leading + used))
        if unit is None:
            return False
        width = leading + used + 1

        if leading:
            direction = 1
        else:
            follower = self.peek(width)
            if follower == "ago":
                direction, width = -1, width + 1
            elif follower == "later":
                direction, width = 1, width + 1
            elif follower == "from" and self.peek(width + 1) == "now":
                direction, width = 1, width + 2
            else:
                return False

        self.pos += width
        self.confident = self.confident and confident
        self._add_modifier(("offset", amount, unit, direction))
        return True

    def _boundary(self) -> bool:
        leading = 1 if self.peek() == "the" else 0
        edge = BOUNDARY_EDGES.get(self.peek(leading))
        if edge is None or self.peek(leading + 1) != "of":
            return False
        index = leading + 2
        if self.peek(index) == "the":
            index += 1

        unit = self.peek(index)
        if unit in PERIOD_UNITS:
            self.pos += index + 1
            self._add_modifier(("boundary", unit, edge))
            return True

        # "end of next month" carries its own anchor
        period = self.peek(index + 1)
        if unit in QUALIFIERS and period in PERIOD_UNITS and period != "day":
            if not self._set_anchor(Anchor(period, qualifier=unit), index + 2):
                return False
            self._add_modifier(("boundary", period, edge))
            return True
        return False

    def _clock(self, ahead: int, *, after_at: bool) -> Optional[Tuple[int, int, int]]:
        """(hour, minute, words used) for a clock time at ``ahead``."""
        word = self.peek(ahead)
        if word == "noon":
            return 12, 0, 1
        if word == "midnight":
            return 0, 0, 1

        match = CLOCK_RE.match(word)
        if not match:
            return None
        hour = int(match.group(1))
        minute = int(match.group(2) or 0)
        meridiem = match.group(3)
        used = 1
        if meridiem is None and self.peek(ahead + 1) in MERIDIEMS:
            meridiem = self.peek(ahead + 1)
            used = 2

        if minute > 59:
            return None
        if meridiem is not None:
            if not 1 <= hour <= 12:
                return None
            hour = hour % 12 + (12 if meridiem == "pm" else 0)
        elif not after_at and match.group(2) is None:
            # a bare number is a count, not a time
            return None
        elif hour > 23:
            return None
        elif after_at and 1 <= hour <= 7:
            hour += 12
        return hour, minute, used

    def _time(self) -> bool:
        word = self.peek()
        if word == "at":
            clock = self._clock(1, after_at=True)
            if clock is None:
                return False
            hour, minute, used = clock
            return self._set_time(hour, minute, used + 1)

        if word in TIMES_OF_DAY:
            return self._set_time(getattr(self.natural, word), 0, 1)
        if word == "this" and self.peek(1) in TIMES_OF_DAY:
            return self._set_time(getattr(self.natural, self.peek(1)), 0, 2)
        if word == "in" and self.peek(1) == "the" and self.peek(2) in TIMES_OF_DAY:
            return self._set_time(getattr(self.natural, self.peek(2)), 0, 3)

        clock = self._clock(0, after_at=False)
        if clock is None:
            return False
        hour, minute, used = clock
        return self._set_time(hour, minute, used)

    def _anchor(self) -> bool:
        word = self.peek()
        if word in SIMPLE_ANCHORS:
            return self._set_anchor(Anchor(word), 1)

        leading = 1 if word == "the" else 0
        if self.peek(leading) == "day":
            relation, target = self.peek(leading + 1), self.peek(leading + 2)
            if relation == "after" and target == "tomorrow":
                return self._set_anchor(Anchor("day_after_tomorrow"), leading + 3)
            if relation == "before" and target == "yesterday":
                return self._set_anchor(Anchor("day_before_yesterday"), leading + 3)
            return False

        weekday = parse_weekday(word)
        if weekday is not None:
            if not self._set_anchor(Anchor("weekday", weekday=weekday), 1):
                return False
            self.confident = False
            return True

        if word in QUALIFIERS:
            target = self.peek(1)
            weekday = parse_weekday(target)
            if weekday is not None:
                return self._set_anchor(Anchor("weekday", weekday=weekday, qualifier=word), 2)
            if target in PERIOD_UNITS and target != "day":
                return self._set_anchor(Anchor(target, qualifier=word), 2)
        return False


class _Evaluator:
    def __init__(self, reference: datetime, natural: NaturalSettings, week_start: int) -> None:
        self.reference = reference
        self.natural = natural
        self.week_start = week_start

    def evaluate(self, node: ExpressionNode) -> datetime:
        if isinstance(node, Anchor):
            return self._anchor(node)
        base = self.evaluate(node.node)
        if isinstance(node, Offset):
            return add_time(base, node.amount * node.direction, node.unit)
        if isinstance(node, BoundaryOf):
            edge = start_of if node.edge == "start" else end_of
            return edge(base, node.unit, week_start=self.week_start)
        return tz.resolve_imaginary(
            base.replace(hour=node.hour, minute=node.minute, second=0, microsecond=0)
        )

    def _anchor(self, anchor: Anchor) -> datetime:
        ref = self.reference
        if anchor.kind == "now":
            return ref
        if anchor.kind in DAY_SHIFTS:
            return start_of(add_time(ref, DAY_SHIFTS[anchor.kind], "day"), "day")
        if anchor.kind == "tonight":
            return tz.resolve_imaginary(start_of(ref, "day").replace(hour=self.natural.night))
        if anchor.kind == "weekday":
            return start_of(add_time(ref, self._weekday_shift(anchor), "day"), "day")

        if anchor.qualifier == "this":
            return start_of(ref, anchor.kind, week_start=self.week_start)
        shift = -1 if anchor.qualifier == "last" else 1
        return start_of(add_time(ref, shift, anchor.kind), anchor.kind, week_start=self.week_start)

    def _weekday_shift(self, anchor: Anchor) -> int:
        current = weekday_index(self.reference)
        target = anchor.weekday
        if anchor.qualifier == "last":
            return -((current - target) % 7 or 7)
        if anchor.qualifier == "this":
            return (target - self.week_start) % 7 - (current - self.week_start) % 7
        return (target - current) % 7 or 7


def _check_bounds(text: object) -> str:
    if not isinstance(text, str):
        raise ParseFailedError(repr(text))
    if len(text) > MAX_INPUT_LENGTH:
        raise InputTooLongError(text, MAX_INPUT_LENGTH)
    return text


def _parse(
    text: str,
    *,
    reference: Optional[TimeInput] = None,
    zone_id: Optional[str] = None,
    config: Optional[WhennyConfig] = None,
    resolver: Optional[ZoneResolver] = None,
) -> ParseResult:
    """Parse ``text`` into a value plus the tree it was read as.

    Raises:
        InputTooLongError: ``text`` is longer than the accepted maximum.
        ParseDepthExceededError: too many offset/boundary clauses.
        ParseFailedError: some part of ``text`` is not recognized.
        InvalidTimezoneError: ``zone_id`` is not a known zone.
    """
    text = _check_bounds(text)
    config = config or get_config()
    resolver = resolver or DEFAULT_RESOLVER
    zone = zone_id or config.default_timezone

    words = tokenize(text)
    scanner = _ClauseScanner(text, words, config.natural)
    node = scanner.scan()

    ref = coerce_time_value(reference) if reference is not None else TimeValue.now()
    reference_wall = resolver.to_wall_clock(ref.instant_millis, zone)
    evaluator = _Evaluator(reference_wall, config.natural, config.calendar.week_start)
    try:
        moment = evaluator.evaluate(node)
        millis = to_epoch_millis(moment)
    except (OverflowError, ValueError) as exc:
        raise ParseFailedError(text, unmatched=normalize(text)) from exc
    if not is_valid_instant(millis):
        raise ParseFailedError(text, unmatched=normalize(text))

    value = TimeValue(millis).with_origin(zone, resolver)
    logger.debug("natural: %r -> %s (%s)", text, value.to_iso(), describe(node))
    return ParseResult(value=value, confident=scanner.confident, matched=" ".join(words), node=node)


def parse_strict(
    text: str,
    *,
    reference: Optional[TimeInput] = None,
    zone_id: Optional[str] = None,
    config: Optional[WhennyConfig] = None,
) -> TimeValue:
    return _parse(text, reference=reference, zone_id=zone_id, config=config).value


def parse_with_info(
    text: str,
    *,
    reference: Optional[TimeInput] = None,
    zone_id: Optional[str] = None,
    config: Optional[WhennyConfig] = None,
    strict: bool = False,
) -> Optional[ParseResult]:
    """Like :func:`parse`, but also report confidence and the parsed tree.

    With ``strict=True`` unrecognized input raises ``ParseFailedError``
    instead of returning None.
    """
    try:
        return _parse(text, reference=reference, zone_id=zone_id, config=config)
    except ParseFailedError:
        if strict:
            raise
        return None


def parse(
    text: str,
    *,
    reference: Optional[TimeInput] = None,
    zone_id: Optional[str] = None,
    config: Optional[WhennyConfig] = None,
) -> Optional[TimeValue]:
    """Parse ``text``; unrecognized input gives None.

    Limit violations (length, nesting) and invalid zones still raise.
    """
    try:
        return parse_strict(text, reference=reference, zone_id=zone_id, config=config)
    except ParseFailedError as exc:
        logger.debug("natural: no match for %r (%s)", text, exc.unmatched)
        return None


def can_parse(
    text: str,
    *,
    reference: Optional[TimeInput] = None,
    zone_id: Optional[str] = None,
    config: Optional[WhennyConfig] = None,
) -> bool:
    try:
        parse_strict(text, reference=reference, zone_id=zone_id, config=config)
    except WhennyError:
        return False
    return True


__all__ = [
    "ParseResult",
    "can_parse",
    "parse",
    "parse_strict",
    "parse_with_info",
]
