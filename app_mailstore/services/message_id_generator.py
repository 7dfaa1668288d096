"""Message ID generation service"""

import threading
import time
from datetime import datetime
from uuid import UUID

from app_mailstore.utils.time_uuid_util import time_uuid_from_ms
from common.components.singleton import Singleton
from common.utils.date_util import get_timestamp_ms_of_datetime


class MessageIdGenerator(Singleton):
    """Message ID generator based on the time the message was sent

    Message dates usually have a granularity of seconds. The generator adds
    the milliseconds of a process-wide counter to the sent date, so messages
    sent in the same second still get distinct, time ordered ids:

    - now > last issued millisecond: the counter adopts the clock
    - otherwise (same millisecond, or clock moved backward): counter + 1

    The counter never moves backward across threads. Ids are NOT guaranteed
    to be unique: two messages sent in the same second by processes whose
    counters share the same millisecond remainder map to the same timestamp,
    and only the random clock sequence and node of the UUID tell them apart.
    """

    def __init__(self):
        # last issued millisecond
        self._last_time = -1
        self._lock = threading.Lock()

    def next_id(self, sent_date: datetime) -> UUID:
        """
        Generate a message id

        Args:
            sent_date: Date the message was sent

        Returns:
            Version 1 UUID carrying sent date plus the sub-second offset
        """
        if sent_date is None:
            raise ValueError("sent date cannot be null")

        offset = self._next_offset()
        return time_uuid_from_ms(get_timestamp_ms_of_datetime(sent_date) + offset)

    def _next_offset(self) -> int:
        with self._lock:
            current = self._current_timestamp()
            if current > self._last_time:
                self._last_time = current
            else:
                self._last_time += 1
            return self._last_time % 1000

    def _current_timestamp(self) -> int:
        """Get current timestamp in milliseconds"""
        return int(time.time() * 1000)
