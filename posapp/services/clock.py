from datetime import date, datetime, timezone
from typing import Callable, Optional

import pytz

from posapp.core.config import settings
from posapp.core.exceptions import ValidationError

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_timezone(name: Optional[str]):
    try:
        return pytz.timezone(name or settings.default_timezone)
    except pytz.UnknownTimeZoneError:
        raise ValidationError(f"Unknown timezone: {name}", details={"field": settings.timezone_header})


def local_date(moment: datetime, tz_name: Optional[str]) -> date:
    """Calendar date of an aware instant as seen in the client's timezone."""
    return moment.astimezone(get_timezone(tz_name)).date()


def to_naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)
