"""Lenient JSON extraction from LLM free text.

Model responses often wrap JSON in prose or markdown fences. extract_json()
returns the first well-formed JSON object or array found in the text and
raises JsonExtractionError when there is none, so callers can treat the
provider as failed.
"""

import json
from typing import Any, Optional

_DECODER = json.JSONDecoder()


class JsonExtractionError(ValueError):
    """Raised when no well-formed JSON value of the expected type is found."""


def extract_json(text: Optional[str], expect: Optional[type] = None) -> Any:
    """Return the first well-formed JSON object/array embedded in `text`.

    Tries a direct parse of the whole (stripped) text first, then scans for
    each "{" or "[" and decodes from there with JSONDecoder.raw_decode, which
    handles nesting and braces inside strings.

    Args:
        text: Raw model response.
        expect: Optional `dict` or `list`. When given, values of the other
            type are skipped and scanning continues.

    Returns:
        The parsed dict or list.

    Raises:
        JsonExtractionError: If the text is empty or holds no matching JSON.
    """
    if not text or not text.strip():
        raise JsonExtractionError("Empty response text")

    stripped = text.strip()
    try:
        value = json.loads(stripped)
    except json.JSONDecodeError:
        pass
    else:
        if isinstance(value, (dict, list)) and (expect is None or isinstance(value, expect)):
            return value

    starts = "{" if expect is dict else "[" if expect is list else "{["
    for idx, char in enumerate(text):
        if char not in starts:
            continue
        try:
            value, _ = _DECODER.raw_decode(text, idx)
        except json.JSONDecodeError:
            continue
        if expect is None or isinstance(value, expect):
            return value

    kind = expect.__name__ if expect else "object/array"
    raise JsonExtractionError(f"No well-formed JSON {kind} found in response")
