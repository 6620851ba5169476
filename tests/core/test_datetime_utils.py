'''
testing common/datetime_utils.py
'''
from datetime import datetime, timedelta, timezone

from availability_manager.common.datetime_utils import to_naive_utc, utc_now


def test_naive_values_are_unchanged():
    moment = datetime(2024, 7, 4, 2, 0)
    assert to_naive_utc(moment) is moment
    assert to_naive_utc(None) is None


def test_offset_values_become_naive_utc():
    moment = datetime(2024, 7, 4, 2, 0, tzinfo=timezone(timedelta(hours=3)))
    assert to_naive_utc(moment) == datetime(2024, 7, 3, 23, 0)
    assert to_naive_utc(moment).tzinfo is None


def test_utc_now_is_naive():
    assert utc_now().tzinfo is None
