from datetime import date, datetime

import pytest

from office_attendance.attendance.duplicate_guard import DuplicateGuard
from office_attendance.core.exceptions import CacheUnavailable


def test_first_claim_wins_and_second_is_refused(fake_redis):
    guard = DuplicateGuard(fake_redis)
    day = date(2026, 2, 2)

    assert guard.try_claim(7, day, datetime(2026, 2, 2, 8, 0)) is True
    assert guard.try_claim(7, day, datetime(2026, 2, 2, 8, 1)) is False
    assert guard.try_claim(3, day, datetime(2026, 2, 2, 8, 1)) is True


def test_claim_key_and_ttl(fake_redis):
    guard = DuplicateGuard(fake_redis, ttl_seconds=86400)
    guard.try_claim(7, date(2026, 2, 2), datetime(2026, 2, 2, 8, 0))

    key = "checkin:7:2026-02-02"
    assert fake_redis.get(key) == "2026-02-02T08:00:00"
    assert fake_redis.ttl(key) == 86400


def test_claim_spanning_midnight_does_not_block_next_day(fake_redis):
    guard = DuplicateGuard(fake_redis, ttl_seconds=86400)

    assert guard.try_claim(7, date(2026, 2, 2), datetime(2026, 2, 2, 23, 59, 59)) is True
    fake_redis.advance(1)
    # The 2026-02-02 claim is still alive for another 86399s.
    assert guard.try_claim(7, date(2026, 2, 2), datetime(2026, 2, 3, 0, 0, 0)) is False
    assert guard.try_claim(7, date(2026, 2, 3), datetime(2026, 2, 3, 0, 0, 0)) is True


def test_claim_expires_exactly_at_ttl(fake_redis):
    guard = DuplicateGuard(fake_redis, ttl_seconds=86400)
    day = date(2026, 2, 2)
    guard.try_claim(7, day, datetime(2026, 2, 2, 0, 0, 0))

    fake_redis.advance(86399)
    assert guard.try_claim(7, day, datetime(2026, 2, 2, 23, 59, 59)) is False
    fake_redis.advance(1)
    assert guard.try_claim(7, day, datetime(2026, 2, 3, 0, 0, 0)) is True


def test_release_frees_the_claim(fake_redis):
    guard = DuplicateGuard(fake_redis)
    day = date(2026, 2, 2)
    guard.try_claim(7, day, datetime(2026, 2, 2, 8, 0))

    guard.release(7, day)

    assert guard.try_claim(7, day, datetime(2026, 2, 2, 8, 5)) is True


def test_redis_errors_surface_as_cache_unavailable(fake_redis):
    fake_redis.down = True
    with pytest.raises(CacheUnavailable):
        DuplicateGuard(fake_redis).try_claim(7, date(2026, 2, 2), datetime(2026, 2, 2, 8, 0))
