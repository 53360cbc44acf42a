"""Compact duration strings ("30s", "5m", "2h") to milliseconds."""

import re

DEFAULT_DURATION_MS = 5 * 60 * 1000  # 5 minutes

_DURATION_RE = re.compile(r"(\d+)([smhdw])", re.ASCII)

_UNIT_MS = {
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
}


def parse_duration(value: str | None) -> int:
    """Parse ``<integer><unit>`` into milliseconds.

    Missing or malformed input falls back to DEFAULT_DURATION_MS.
    "0s" is valid and yields 0.
    """
    if not value or not isinstance(value, str):
        return DEFAULT_DURATION_MS
    match = _DURATION_RE.fullmatch(value)
    if not match:
        return DEFAULT_DURATION_MS
    amount, unit = match.groups()
    return int(amount) * _UNIT_MS[unit]
