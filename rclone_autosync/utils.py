"""Utility functions for rclone-autosync."""

import math
import re

# =============================================================================
# Defaults for the watch loop
# =============================================================================

# Sync tool executable
DEFAULT_TOOL: str = "rclone"

# Delay before a fresh run after an error (1 minute)
DEFAULT_ERROR_RETRY_DELAY: float = 60.0

# Period of the unconditional downward sync (1 minute)
DEFAULT_REMOTE_CHECK_PERIOD: float = 60.0

# Period of the local file system listing (1 second)
DEFAULT_LOCAL_CHECK_PERIOD: float = 1.0

# Quiet period required after a local change before syncing up (5 seconds)
DEFAULT_LOCAL_CHANGE_DEBOUNCE_DELAY: float = 5.0


# =============================================================================
# Duration utilities
# =============================================================================

_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Parse a Go-style duration string into seconds.

    Accepts a sequence of decimal numbers each followed by a unit
    (``ns``, ``us``, ``ms``, ``s``, ``m``, ``h``), or a bare number
    of seconds.

    Args:
        value: Duration string (e.g., "1m30s", "300ms", "5")

    Returns:
        Duration in seconds

    Raises:
        ValueError: If the string is not a valid duration

    Examples:
        >>> parse_duration("1m30s")
        90.0
        >>> parse_duration("300ms")
        0.3
        >>> parse_duration("5")
        5.0
    """
    text = value.strip()
    if not text:
        raise ValueError("Empty duration")

    try:
        number = float(text)
    except ValueError:
        pass
    else:
        if not math.isfinite(number):
            raise ValueError(f"Invalid duration: {value!r}")
        return number

    sign = 1.0
    if text[0] in "+-":
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise ValueError(f"Invalid duration: {value!r}")
        number, unit = match.groups()
        total += float(number) * _DURATION_UNITS[unit]
        pos = match.end()

    if pos == 0:
        raise ValueError(f"Invalid duration: {value!r}")
    return sign * total


def format_duration(seconds: float) -> str:
    """Format seconds the way Go prints a time.Duration.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string (e.g., "1m0s", "5s", "250ms")

    Examples:
        >>> format_duration(60)
        '1m0s'
        >>> format_duration(5)
        '5s'
        >>> format_duration(0.25)
        '250ms'
    """
    if seconds == 0:
        return "0s"
    if seconds < 0:
        return "-" + format_duration(-seconds)
    if seconds < 1:
        return f"{seconds * 1000:g}ms"

    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    secs_str = f"{secs:g}s"
    if hours:
        return f"{int(hours)}h{int(minutes)}m{secs_str}"
    if minutes:
        return f"{int(minutes)}m{secs_str}"
    return secs_str
