from datetime import datetime

from prep_scheduler.scheduling import Interval

DAY = datetime(2026, 10, 19)


def at(hour: int, minute: int = 0, day: datetime = DAY) -> datetime:
    """A wall-clock time on the test day."""
    return day.replace(hour=hour, minute=minute)


def busy(start: tuple, end: tuple, label: str = "Meeting") -> Interval:
    return Interval(at(*start), at(*end), label)
