from datetime import date, timedelta

import pytest
from structlog.testing import capture_logs

from coactivity.circles.schemas import Circle
from coactivity.exceptions import DataFetchError, MalformedRecordError, NotAMemberError
from coactivity.signals.aggregation import aggregate_recent_signals, detect_circle_signals
from coactivity.signals.schemas import SignalKind

DAY = date(2026, 2, 14)


@pytest.fixture
def circles(me, tanaka, suzuki):
    return [
        Circle(id=1, name="朝活", members=[me, tanaka]),
        Circle(id=2, name="夜活", members=[me, suzuki]),
    ]


def _loader(records):
    """Loader that returns only the records of the circle's members, like a scoped store query."""
    def load(circle):
        keys = {m.github_user_id for m in circle.members}
        return [r for r in records if r.github_user_id in keys]
    return load


def test_detect_circle_signals_not_a_member(circle, make_record):
    with pytest.raises(NotAMemberError) as exc_info:
        detect_circle_signals(circle, 999, [make_record(100, DAY)])

    assert exc_info.value.circle_id == circle.id


def test_detect_circle_signals_ignores_records_of_outsiders(circle, make_record):
    # 300 is not in the circle; the store handing back its row must not create a signal
    signals = detect_circle_signals(circle, 1, [make_record(100, DAY), make_record(300, DAY)])

    assert signals == []


def test_tags_signals_with_circle_identity(circles, make_record):
    records = [make_record(100, DAY), make_record(200, DAY)]

    signals = aggregate_recent_signals(circles, 1, _loader(records))

    assert len(signals) == 1
    assert signals[0].circle_id == 1
    assert signals[0].circle_name == "朝活"


def test_shared_member_activity_does_not_leak_between_circles(circles, make_record):
    # me and tanaka overlap on DAY; suzuki is only active on another day
    records = [
        make_record(100, DAY, language="Go"),
        make_record(200, DAY, language="Go"),
        make_record(300, DAY - timedelta(days=2), language="Go"),
    ]

    signals = aggregate_recent_signals(circles, 1, _loader(records))

    assert {s.circle_id for s in signals} == {1}
    assert all(u.github_username == "tanaka" for s in signals for u in s.users)

    only_second = aggregate_recent_signals(circles[1:], 1, _loader(records))
    assert only_second == []


def test_truncates_to_most_recent(me, tanaka, suzuki, make_record):
    circles = [
        Circle(id=1, name="a", members=[me, tanaka]),
        Circle(id=2, name="b", members=[me, suzuki]),
    ]
    days = [DAY - timedelta(days=n) for n in range(15)]
    records = [make_record(100, d) for d in days]
    # 15 distinct dates split across the two circles
    records += [make_record(200, d) for d in days[0::2]]
    records += [make_record(300, d) for d in days[1::2]]

    signals = aggregate_recent_signals(circles, 1, _loader(records), limit=10)

    assert len(signals) == 10
    assert [s.date for s in signals] == days[:10]


def test_default_limit_comes_from_settings(circles, make_record, monkeypatch):
    from coactivity.config import settings

    monkeypatch.setattr(settings, "RECENT_SIGNALS_LIMIT", 2)
    days = [DAY - timedelta(days=n) for n in range(5)]
    records = [make_record(m, d) for d in days for m in (100, 200)]

    assert len(aggregate_recent_signals(circles, 1, _loader(records))) == 2


def test_rejects_non_positive_limit(circles, make_record):
    records = [make_record(m, DAY) for m in (100, 200, 300)]

    for limit in (0, -1):
        with pytest.raises(ValueError):
            aggregate_recent_signals(circles, 1, _loader(records), limit=limit)


def test_skips_circle_where_user_is_not_a_member(tanaka, suzuki, me, make_record):
    circles = [
        Circle(id=1, name="others", members=[tanaka, suzuki]),
        Circle(id=2, name="mine", members=[me, tanaka]),
    ]
    records = [make_record(m, DAY) for m in (100, 200, 300)]

    with capture_logs() as logs:
        signals = aggregate_recent_signals(circles, 1, _loader(records))

    assert [s.circle_id for s in signals] == [2]
    skipped = [entry for entry in logs if entry["event"] == "circle_signals_skipped"]
    assert len(skipped) == 1
    assert skipped[0]["circle_id"] == 1
    assert skipped[0]["user_id"] == 1
    assert skipped[0]["error"] == "User is not a member of this circle (user_id=1, circle_id=1)"
    assert skipped[0]["log_level"] == "warning"


def test_skips_circle_whose_fetch_fails(circles, make_record):
    records = [make_record(m, DAY) for m in (100, 200, 300)]
    load = _loader(records)

    def flaky(circle):
        if circle.id == 1:
            raise DataFetchError("commit stats", "timeout")
        return load(circle)

    signals = aggregate_recent_signals(circles, 1, flaky)

    assert [s.circle_id for s in signals] == [2]


def test_malformed_record_fails_whole_aggregation(circles, make_record):
    def load(circle):
        return [make_record(100, DAY), {"github_user_id": 200, "date": "not-a-date", "repository": "r"}]

    with pytest.raises(MalformedRecordError):
        aggregate_recent_signals(circles, 1, load)


def test_no_circles_returns_empty():
    assert aggregate_recent_signals([], 1, lambda circle: []) == []


def test_same_date_across_circles_keeps_circle_order(circles, make_record):
    records = [make_record(m, DAY) for m in (100, 200, 300)]

    signals = aggregate_recent_signals(circles, 1, _loader(records))

    assert [(s.circle_id, s.type) for s in signals] == [
        (1, SignalKind.SAME_DAY),
        (2, SignalKind.SAME_DAY),
    ]
