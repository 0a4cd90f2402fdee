"""Parser for ``go test -json`` event lines."""

import json
import math
import re
from datetime import datetime, timezone
from typing import Optional

import pydantic
from pydantic import BaseModel, ConfigDict

from .errors import DecodeError, ValidationError
from .models import TestAction, TestRecord

RFC3339_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)


class _RawEvent(BaseModel):
    """Shape of a decoded line. Keys are lowercased before validation."""

    model_config = ConfigDict(strict=True)

    time: Optional[str] = None
    test: Optional[str] = None
    action: Optional[str] = None
    package: Optional[str] = None
    elapsed: Optional[float] = None


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp and normalise it to UTC.

    An explicit offset is required; ``Z`` is accepted. Other ISO 8601
    shapes (space separator, no seconds, basic format) are rejected.
    """
    if not RFC3339_PATTERN.fullmatch(value):
        raise DecodeError(f"failed to parse time, not RFC 3339: {value}")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise DecodeError(f"failed to parse time: {value}") from e
    if parsed.tzinfo is None:
        raise DecodeError(f"failed to parse time, no UTC offset: {value}")
    return parsed.astimezone(timezone.utc)


def parse_line(line: str) -> TestRecord:
    """Decode and validate one event line.

    Raises DecodeError when the line is not a JSON object of the expected
    shape and ValidationError when the test name is missing or the action
    is anything but ``pass``/``fail``.
    """
    try:
        content = json.loads(line)
    except json.JSONDecodeError as e:
        raise DecodeError(f"failed to parse line: {e}") from e
    if not isinstance(content, dict):
        raise DecodeError(f"line is not a JSON object: {line.strip()}")

    # test2json writes capitalised keys, other producers lowercase ones
    try:
        event = _RawEvent.model_validate({key.lower(): value for key, value in content.items()})
    except pydantic.ValidationError as e:
        raise DecodeError(f"unexpected field types in line: {line.strip()}") from e

    if not event.test:
        raise ValidationError(f"no test name found in line: {line.strip()}")
    if event.action not in {action.value for action in TestAction}:
        raise ValidationError(f"unknown action: {event.action}")
    if event.elapsed is not None:
        if not math.isfinite(event.elapsed):
            raise DecodeError(f"elapsed time is not a number: {event.elapsed}")
        if event.elapsed < 0:
            raise ValidationError(f"negative elapsed time: {event.elapsed}")
        if not math.isfinite(event.elapsed * 1000):
            raise ValidationError(f"elapsed time out of range: {event.elapsed}")

    return TestRecord(
        test=event.test,
        action=TestAction(event.action),
        package=event.package or "",
        time=parse_timestamp(event.time) if event.time else None,
        elapsed=event.elapsed or 0.0,
    )
