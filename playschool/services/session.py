"""Academic session calendar (April to March)."""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

SESSION_START_MONTH = 4  # April


@dataclass(frozen=True)
class Session:
    start_year: int

    @property
    def end_year(self) -> int:
        return self.start_year + 1

    @property
    def start(self) -> date:
        return date(self.start_year, SESSION_START_MONTH, 1)

    @property
    def end(self) -> date:
        return date(self.end_year, SESSION_START_MONTH - 1, 31)

    @property
    def label(self) -> str:
        return f"{self.start_year}-{self.end_year}"

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def as_dict(self) -> dict:
        return {
            "start_year": self.start_year,
            "end_year": self.end_year,
            "start": self.start,
            "end": self.end,
            "label": self.label,
        }


def session_for(today: date) -> Session:
    """
    Session containing `today`.

    January to March still belong to the session that started the previous
    April: 2024-02-15 -> 2023-24, 2024-06-01 -> 2024-25.
    """
    if today.month < SESSION_START_MONTH:
        return Session(start_year=today.year - 1)
    return Session(start_year=today.year)


def end_of_month(today: date) -> date:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return date(today.year, today.month, last_day)
