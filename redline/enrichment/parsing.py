"""Parsing of model responses."""

import json
import re
from typing import Any, Dict

_FENCE = re.compile(r"```(?:json)?\s*\n?|\n?```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences around a JSON reply."""
    return _FENCE.sub("", text).strip()


def parse_json_object(text: str) -> Dict[str, Any]:
    """
    Decode a model reply into a JSON object.

    Raises:
        ValueError: When the reply is not JSON or not an object.
    """
    data = json.loads(strip_code_fences(text or ""))
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data
