"""
Form input parsing.

Raw field values are coerced to floats here, before they reach the
calculator. Bad input degrades to a default instead of raising, and
negative values are clamped to the field minimum.
"""

import logging
import math
import re
from typing import Any

log = logging.getLogger(__name__)

# Commas are only accepted as thousands separators: "2,000,000.5"
_THOUSANDS_PATTERN = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d*)?$")


def parse_number(raw: Any, default: float = 0.0, minimum: float = 0.0) -> float:
    """Coerce a raw form value to a non-negative float.

    Args:
        raw: Value as typed by the user (str, int, float or None)
        default: Value used for blank, non-numeric or non-finite input
        minimum: Lower bound; smaller values are clamped up to it

    Returns:
        The parsed, clamped float
    """
    if raw is None or isinstance(raw, bool):
        return default

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return default
        if "," in text:
            if not _THOUSANDS_PATTERN.match(text):
                log.debug("Ambiguous comma in input %r replaced with %s", raw, default)
                return default
            text = text.replace(",", "")
        text = text.replace("_", "")
    else:
        text = raw

    try:
        value = float(text)
    except (TypeError, ValueError):
        log.debug("Non-numeric input %r replaced with %s", raw, default)
        return default

    if not math.isfinite(value):
        log.debug("Non-finite input %r replaced with %s", raw, default)
        return default

    if value < minimum:
        log.debug("Input %s clamped to minimum %s", value, minimum)
        return minimum

    return value
