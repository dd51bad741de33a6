"""Inbound payload decoding and outbound acknowledgement encoding."""

from __future__ import annotations

import json
import logging
from typing import Any

import orjson

logger = logging.getLogger(__name__)

SUCCESS_ACK: dict[str, bool] = {"success": True}


def decode_payload(raw: Any) -> Any:
    """Decode a wire payload, falling back to the raw value.

    Agents usually send JSON strings, but some methods carry a plain string.
    This never raises: anything that is not valid JSON passes through as-is.
    """
    if not isinstance(raw, (str, bytes, bytearray)):
        return raw
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        logger.debug("payload is not JSON, using raw value")
        return raw


def encode_response(response: Any) -> str:
    # Handlers that already serialized their response are passed through.
    if response is None:
        response = SUCCESS_ACK
    if isinstance(response, str):
        return response
    if isinstance(response, (bytes, bytearray)):
        return bytes(response).decode("utf-8")
    return orjson.dumps(response, option=orjson.OPT_NON_STR_KEYS).decode("utf-8")


__all__ = ["SUCCESS_ACK", "decode_payload", "encode_response"]
