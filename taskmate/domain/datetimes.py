from __future__ import annotations

from datetime import date, time

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
NO_TIME_MARKER = "-"


def format_for_display(day: date, moment: time | None = None) -> str:
    # strftime("%b") follows LC_TIME; month names stay English here.
    date_part = f"{MONTH_ABBR[day.month - 1]} {day.day:02d} {day.year:04d}"
    if moment is None:
        return date_part
    return f"{date_part} {moment:%H:%M}"


def format_date_for_storage(day: date) -> str:
    return day.isoformat()


def format_time_for_storage(moment: time | None) -> str:
    if moment is None:
        return NO_TIME_MARKER
    return f"{moment:%H:%M}"


def parse_iso_date(raw: str) -> date:
    """Strict ``YYYY-MM-DD``; raises ``ValueError`` on anything else."""
    token = raw.strip()
    if len(token) != 10 or not token.isascii() or token[4] != "-" or token[7] != "-":
        raise ValueError(f"not an ISO date: {raw!r}")
    return date.fromisoformat(token)


def parse_clock_time(raw: str) -> time:
    """Strict ``HH:MM``; raises ``ValueError`` on anything else."""
    token = raw.strip()
    digits = token[:2] + token[3:]
    if len(token) != 5 or token[2] != ":" or not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"not an HH:MM time: {raw!r}")
    return time(int(token[:2]), int(token[3:]))
