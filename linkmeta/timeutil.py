import logging
import os
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

logger = logging.getLogger("linkmeta")

# 默认按北京时间输出发布时间
DEFAULT_UTC_OFFSET = 8


def parse_utc_offset(raw: Optional[str], default: int = DEFAULT_UTC_OFFSET) -> int:
    """Whole hours in ``-23..23``; anything else falls back to ``default``."""
    if raw is None or not raw.strip():
        return default
    try:
        hours = int(raw.strip())
    except ValueError:
        logger.warning(f"LINKMETA_UTC_OFFSET 无效: {raw!r}，使用默认值 {default}")
        return default
    if not -23 <= hours <= 23:
        logger.warning(f"LINKMETA_UTC_OFFSET 超出范围: {hours}，使用默认值 {default}")
        return default
    return hours


UTC_OFFSET_HOURS = parse_utc_offset(os.getenv("LINKMETA_UTC_OFFSET"))
DEFAULT_TZ = timezone(timedelta(hours=UTC_OFFSET_HOURS))

TIME_FORMAT = "%Y-%m-%d %H:%M"


def format_timestamp(ts, tz: Optional[tzinfo] = None) -> str:
    """Unix seconds -> ``YYYY-MM-DD HH:MM`` in ``tz`` (default: configured offset)."""
    try:
        ts = int(ts)
        if ts > 0:
            return datetime.fromtimestamp(ts, tz or DEFAULT_TZ).strftime(TIME_FORMAT)
    except (ValueError, TypeError, OSError, OverflowError):
        pass
    return ""


def format_timestamp_ms(ms, tz: Optional[tzinfo] = None) -> str:
    try:
        ms = int(ms)
    except (ValueError, TypeError):
        return ""
    return format_timestamp(ms // 1000, tz)


def format_date(year, month, day) -> str:
    return f"{int(year):04d}-{int(month):02d}-{int(day):02d}"
