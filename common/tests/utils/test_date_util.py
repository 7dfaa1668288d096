from datetime import datetime
from unittest import TestCase
from unittest.mock import patch

from common.utils.date_util import get_datetime_of_timestamp_ms, get_timestamp_ms_of_datetime


class TestDateUtil(TestCase):
    def test_round_trip(self):
        date = datetime(2024, 5, 17, 8, 30, 15, 250000)
        timestamp = get_timestamp_ms_of_datetime(date)
        self.assertEqual(get_datetime_of_timestamp_ms(timestamp), date)

    def test_none_is_now(self):
        with patch("common.utils.date_util.get_now_timestamp_ms", return_value=1700000000000):
            self.assertEqual(get_timestamp_ms_of_datetime(None), 1700000000000)
