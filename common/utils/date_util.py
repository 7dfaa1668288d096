from datetime import datetime
from typing import Optional


def get_now_timestamp_ms() -> int:
    """
    Get the current timestamp in milliseconds
    """
    now = datetime.now()
    return int(round(now.timestamp() * 1000))


def get_timestamp_ms_of_datetime(date_obj: Optional[datetime]) -> int:
    """
    Convert datetime object into timestamp in milliseconds,
    the current time is used when no datetime is given
    """
    if date_obj is None:
        return get_now_timestamp_ms()
    return int(round(date_obj.timestamp() * 1000))


def get_datetime_of_timestamp_ms(timestamp_ms: int) -> datetime:
    """
    Convert timestamp in milliseconds into datetime object
    """
    return datetime.fromtimestamp(timestamp_ms / 1000)
