"""Shared field parsing for dailyFocus models.

Stored rows are inconsistent about weekdays and times of day: some use
integers, some numeric strings, some names ("monday", "mon"), some SQL time
values with seconds. Everything is normalized here to the encodings used by
the engine (0 = Sunday ... 6 = Saturday, zero-padded HH:MM).
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from dailyfocus.models.errors import InvalidRuleConfiguration

_HHMM_RE = re.compile(r"^(?P<h>\d{1,2}):(?P<m>\d{2})(?::\d{2}(?:\.\d+)?)?$")

_WEEKDAY_ALIASES: list[tuple[re.Pattern, int]] = [
    (re.compile(r"^(sun|sunday|su)$", re.I), 0),
    (re.compile(r"^(mon|monday|mo)$", re.I), 1),
    (re.compile(r"^(tue|tues|tuesday|tu)$", re.I), 2),
    (re.compile(r"^(wed|weds|wednesday|we)$", re.I), 3),
    (re.compile(r"^(thu|thur|thurs|thursday|th)$", re.I), 4),
    (re.compile(r"^(fri|friday|fr)$", re.I), 5),
    (re.compile(r"^(sat|saturday|sa)$", re.I), 6),
]


def normalize_hhmm(value: Optional[str]) -> Optional[str]:
    """Normalize a time-of-day string to zero-padded ``HH:MM``.

    Accepts ``H:MM``, ``HH:MM`` and ``HH:MM:SS`` (as returned by SQL time
    columns). Seconds are dropped.

    Raises:
        ValueError: if the value is not a valid time of day
    """
    if value is None:
        return None
    if hasattr(value, "hour") and hasattr(value, "minute"):
        return f"{value.hour:02d}:{value.minute:02d}"
    m = _HHMM_RE.match(str(value).strip())
    if not m:
        raise ValueError(f"Invalid time of day: {value!r}")
    h = int(m.group("h"))
    minute = int(m.group("m"))
    if h > 23 or minute > 59:
        raise ValueError(f"Invalid time of day: {value!r}")
    return f"{h:02d}:{minute:02d}"


def parse_weekday(value) -> int:
    """Parse one weekday token into its integer index.

    Raises:
        InvalidRuleConfiguration: if the token is not a recognizable weekday
    """
    if isinstance(value, bool):
        raise InvalidRuleConfiguration(f"Invalid weekday: {value!r}", problems=["weekday"])
    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise InvalidRuleConfiguration(f"Weekday out of range: {value}", problems=["weekday"])
    if isinstance(value, str):
        token = value.strip()
        if token.isdigit():
            return parse_weekday(int(token))
        for pat, idx in _WEEKDAY_ALIASES:
            if pat.match(token):
                return idx
    raise InvalidRuleConfiguration(f"Invalid weekday: {value!r}", problems=["weekday"])


def normalize_weekdays(values: Iterable) -> List[int]:
    """Normalize weekday tokens to integers (deduped, stable order)."""
    seen = set()
    out: List[int] = []
    for value in values or []:
        idx = parse_weekday(value)
        if idx not in seen:
            seen.add(idx)
            out.append(idx)
    return out
