"""Rolling date window and time slots offered by the tour booking form."""

from datetime import date, timedelta
from typing import Callable, List, Optional, Tuple

from pydantic import BaseModel

WINDOW_DAYS = 14
PAGE_DAYS = 7

# Fixed English names so the window renders the same under any locale
_WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# (value sent to the API, label shown to the visitor)
TIME_SLOTS: Tuple[Tuple[str, str], ...] = (
    ("09:00 AM", "9:00 AM"),
    ("10:00 AM", "10:00 AM"),
    ("11:00 AM", "11:00 AM"),
    ("12:00 PM", "12:00 PM"),
    ("01:00 PM", "1:00 PM"),
    ("02:00 PM", "2:00 PM"),
    ("03:00 PM", "3:00 PM"),
    ("04:00 PM", "4:00 PM"),
    ("05:00 PM", "5:00 PM"),
    ("06:00 PM", "6:00 PM"),
    ("07:00 PM", "7:00 PM"),
)

TIME_SLOT_VALUES = tuple(value for value, _ in TIME_SLOTS)


class CalendarDateEntry(BaseModel):
    """One selectable day of the tour calendar"""
    day: str
    date: str
    full_date: str
    is_today: bool
    is_weekend: bool

    class Config:
        frozen = True


def generate_dates(offset: int = 0, today: Optional[date] = None) -> List[CalendarDateEntry]:
    """
    Build the 14-day window that starts tomorrow, shifted by ``offset`` days.

    ``is_today`` marks the first entry of the unshifted window (the earliest
    bookable day); shifted windows have no such entry.
    """
    today = today or date.today()
    start = today + timedelta(days=1 + offset)

    entries = []
    for i in range(WINDOW_DAYS):
        day = start + timedelta(days=i)
        entries.append(CalendarDateEntry(
            day=_WEEKDAY_NAMES[day.weekday()],
            date=str(day.day),
            full_date=day.isoformat(),
            is_today=(i == 0 and offset == 0),
            is_weekend=day.weekday() >= 5,
        ))
    return entries


class DateNavigator:
    """Pages the date window a week at a time, never before tomorrow."""

    def __init__(self, clock: Callable[[], date] = date.today):
        self.clock = clock
        self.offset = 0

    @property
    def dates(self) -> List[CalendarDateEntry]:
        return generate_dates(self.offset, self.clock())

    @property
    def can_go_back(self) -> bool:
        return self.offset > 0

    def previous(self) -> None:
        if self.offset > 0:
            self.offset -= PAGE_DAYS

    def next(self) -> None:
        self.offset += PAGE_DAYS

    def reset(self) -> None:
        self.offset = 0
