"""Number composition shared by transaction and account number publishers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

TIMESTAMP_FORMAT = "%y%m%d%H%M%S"
SEQUENCE_DIGITS = 3


def luhn_check_digit(digits: str) -> int:
    """Check digit that makes ``digits + check`` pass the Luhn test."""
    total = 0
    for index, char in enumerate(reversed(digits)):
        value = int(char)
        if index % 2 == 0:
            value *= 2
            if value > 9:
                value -= 9
        total += value
    return (10 - total % 10) % 10


def timestamp_key(now: datetime) -> str:
    return now.strftime(TIMESTAMP_FORMAT)


def compose_number(now: datetime, sequence: int, *, check_digit: bool = False) -> str:
    """``<yymmddHHMMSS><sequence>[<luhn>]``; unique while sequence < 1000 per second."""
    number = f"{timestamp_key(now)}{sequence:0{SEQUENCE_DIGITS}d}"
    if check_digit:
        number += str(luhn_check_digit(number))
    return number
