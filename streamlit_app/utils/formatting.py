"""
Cooking-time parsing and display helpers.

# NOTE: parse_cooking_minutes() keeps every digit of the model's time string and
    ignores the units, so "1 hour" parses as 1 minute and "1 hr 30 min" as 130.
    Suggestions are displayed and favorited with that value.
"""

import re
from typing import Optional


def parse_cooking_minutes(time_str: Optional[str]) -> int:
    """
    Convert a human time string into minutes by stripping every non-digit.

    Args:
        time_str: Time as returned by the recipe generator (e.g., "45 mins")

    Returns:
        The remaining digits as an integer, or 0 if there are none

    Examples:
        >>> parse_cooking_minutes("45 mins")
        45
        >>> parse_cooking_minutes("1 hour")
        1
        >>> parse_cooking_minutes("quick")
        0
    """
    digits = re.sub(r"\D", "", time_str or "")
    return int(digits) if digits else 0


def format_cooking_time(minutes: Optional[int]) -> str:
    """
    Format minutes for display.

    Examples:
        >>> format_cooking_time(45)
        '45 min.'
        >>> format_cooking_time(60)
        '1 hour'
        >>> format_cooking_time(135)
        '2 hours 15 min.'
    """
    minutes = minutes or 0
    if minutes < 60:
        return f"{minutes} min."

    hours, mins = divmod(minutes, 60)
    label = "hour" if hours == 1 else "hours"
    if mins == 0:
        return f"{hours} {label}"
    return f"{hours} {label} {mins} min."
