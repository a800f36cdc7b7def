import re
from datetime import UTC, date, datetime, timedelta

from zenith.errors import ValidationError

DATE_KEY_FORMAT = "%Y-%m-%d"
DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def now() -> datetime:
    return datetime.now(UTC)


def date_key(day: date) -> str:
    """Canonical yyyy-MM-dd key for a calendar day."""
    return day.strftime(DATE_KEY_FORMAT)


def parse_date_key(value: str) -> date:
    """Parse a yyyy-MM-dd key, raising ValidationError on anything else."""
    if not DATE_KEY_RE.fullmatch(value):
        raise ValidationError(f"Invalid date key: '{value}'")
    try:
        return datetime.strptime(value, DATE_KEY_FORMAT).replace(tzinfo=UTC).date()
    except ValueError as e:
        raise ValidationError(f"Invalid date key: '{value}'") from e


def week_days(today: date) -> list[date]:
    """Monday to Sunday of the week containing `today`."""
    monday = today - timedelta(days=today.weekday())
    return [monday + timedelta(days=offset) for offset in range(7)]
