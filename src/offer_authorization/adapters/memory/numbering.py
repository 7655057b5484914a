"""In-memory number publishers."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from ...primitives.numbers import compose_number, timestamp_key

if TYPE_CHECKING:
    from datetime import datetime


class InMemoryNumberPublisher:
    """Per-project, per-second counters; ``check_digit`` appends a Luhn digit."""

    def __init__(self, *, check_digit: bool = False) -> None:
        self._check_digit = check_digit
        self._counters: defaultdict[tuple[str, str], int] = defaultdict(int)

    async def publish(self, project_id: str, now: datetime) -> str:
        key = (project_id, timestamp_key(now))
        self._counters[key] += 1
        return compose_number(now, self._counters[key], check_digit=self._check_digit)
