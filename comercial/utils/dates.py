"""Calendar date helpers.

Users type and read dates as ``DD/MM/YYYY``; the data service stores them as
ISO-8601 instants of local midnight. Everything in between works on plain
``datetime.date`` objects so no time-of-day or UTC offset can shift a day.
"""
import re
import calendar
from datetime import date, datetime, time, timezone
from typing import Optional, Tuple, Union

from dateutil import tz
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta
from flask import current_app, has_app_context

DEFAULT_TIMEZONE = 'America/Sao_Paulo'

LOCAL_DATE_PATTERN = re.compile(r'^(\d{2})/(\d{2})/(\d{4})$')

MONTH_NAMES = [
    'Janeiro', 'Fevereiro', 'Março', 'Abril', 'Maio', 'Junho',
    'Julho', 'Agosto', 'Setembro', 'Outubro', 'Novembro', 'Dezembro'
]


def parse_local_date(text: Optional[str]) -> Optional[date]:
    """
    Parse a ``DD/MM/YYYY`` string into a calendar date.

    Only the exact two-digit/two-digit/four-digit pattern is accepted and the
    values must name a real calendar day: ``31/02/2024`` is rejected instead
    of rolling over into March.

    Args:
        text: User input

    Returns:
        date or None if the text is malformed or not a real calendar day

    Examples:
        >>> parse_local_date('29/02/2024')
        datetime.date(2024, 2, 29)
        >>> parse_local_date('31/02/2024') is None
        True
    """
    if not isinstance(text, str):
        return None

    match = LOCAL_DATE_PATTERN.match(text.strip())
    if not match:
        return None

    day, month, year = (int(part) for part in match.groups())
    try:
        parsed = date(year, month, day)
    except ValueError:
        return None

    if (parsed.year, parsed.month, parsed.day) != (year, month, day):
        return None
    return parsed


def format_local_date(value: Optional[Union[date, datetime]]) -> str:
    """Format a date as ``DD/MM/YYYY`` (empty string for None)."""
    if value is None:
        return ''
    return f'{value.day:02d}/{value.month:02d}/{value.year:04d}'


def get_local_timezone():
    """Timezone used to turn service instants into calendar dates."""
    name = DEFAULT_TIMEZONE
    if has_app_context():
        name = current_app.config.get('APP_TIMEZONE') or DEFAULT_TIMEZONE
    return tz.gettz(name)


def local_now() -> datetime:
    """Current local wall-clock time as a naive datetime."""
    return datetime.now(get_local_timezone()).replace(tzinfo=None)


def to_api_instant(value: Optional[Union[date, datetime]]) -> Optional[str]:
    """
    Render a calendar date (or local datetime) as a UTC ISO-8601 instant.

    A plain date is sent as its local midnight, e.g. ``2024-01-10`` in
    America/Sao_Paulo becomes ``2024-01-10T03:00:00.000Z``.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        local = value if value.tzinfo else value.replace(tzinfo=get_local_timezone())
    else:
        local = datetime.combine(value, time.min).replace(tzinfo=get_local_timezone())

    instant = local.astimezone(timezone.utc)
    return instant.strftime('%Y-%m-%dT%H:%M:%S.') + f'{instant.microsecond // 1000:03d}Z'


def parse_api_datetime(value) -> Optional[datetime]:
    """
    Parse a service timestamp into a naive local datetime.

    Aware values are converted to the local timezone first; naive values are
    assumed to be local already. Unparseable values yield None.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    else:
        try:
            parsed = isoparse(str(value))
        except (ValueError, OverflowError):
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(get_local_timezone()).replace(tzinfo=None)
    return parsed


def parse_api_date(value) -> Optional[date]:
    """Calendar date of a service timestamp (see parse_api_datetime)."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = parse_api_datetime(value)
    return parsed.date() if parsed else None


def first_day_of_month(value: date) -> date:
    return value.replace(day=1)


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month."""
    return value + relativedelta(months=months)


def day_in_month(year: int, month: int, day: int) -> date:
    """
    Build ``year-month-day``, clamping ``day`` to the month length.

    A recurring due day of 30 falls on 28/29 February instead of spilling
    into March.
    """
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(day, last_day)))


def is_in_month(value: Optional[date], month: int, year: int) -> bool:
    """True when ``value`` falls in the given calendar month."""
    if value is None:
        return False
    return value.month == month and value.year == year


def previous_period(month: int, year: int) -> Tuple[int, int]:
    """Reporting period one month before ``(month, year)``."""
    if month == 1:
        return 12, year - 1
    return month - 1, year


def next_period(month: int, year: int) -> Tuple[int, int]:
    """Reporting period one month after ``(month, year)``."""
    if month == 12:
        return 1, year + 1
    return month + 1, year


def month_label(month: int, year: int) -> str:
    """Short chart label, e.g. ``Jan/24``."""
    return f'{MONTH_NAMES[month - 1][:3]}/{str(year)[2:]}'


def period_name(month: int, year: int) -> str:
    """Long period name, e.g. ``Março de 2024``."""
    return f'{MONTH_NAMES[month - 1]} de {year}'
