"""Parsing of raw payload strings submitted by clients."""

from contextlib import suppress
from typing import Any

import orjson

from ..core.errors import InvalidPayload
from ..core.logger import get_logger

logger = get_logger(__name__)


# PUBLIC_INTERFACE
def parse_payload(raw: str) -> Any:
    """Parse a raw JSON string into a Python value.

    Only syntax is checked; any JSON value (object, array or scalar) is accepted.
    Parsing goes through orjson, the same library that renders responses, so
    every accepted value can be written back out. NaN/Infinity literals and
    numbers that overflow a double are rejected.

    Raises:
        InvalidPayload: if the string is not valid JSON.
    """
    try:
        value = orjson.loads(raw)
        orjson.dumps(value)
    except (orjson.JSONDecodeError, orjson.JSONEncodeError) as exc:
        # Logging problems must never change the response.
        with suppress(Exception):
            logger.warning(
                "Invalid JSON payload provided",
                extra={"error": str(exc), "payload_length": len(raw)},
            )
        raise InvalidPayload() from exc
    return value
