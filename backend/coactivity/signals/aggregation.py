"""Per-circle detection pipeline and the cross-circle "recent signals" merge."""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

import structlog

from coactivity.circles.membership import find_member, member_keys, profiles_by_key
from coactivity.circles.schemas import Circle
from coactivity.commits.index import build_day_index
from coactivity.commits.schemas import CommitStatRecord
from coactivity.config import resolve_override
from coactivity.exceptions import DataFetchError, NotAMemberError
from coactivity.signals.detection import detect_signals
from coactivity.signals.schemas import Signal

logger = structlog.get_logger()

RecordLoader = Callable[[Circle], Iterable[CommitStatRecord | Mapping[str, Any]]]


def detect_circle_signals(
    circle: Circle,
    user_id: int,
    records: Iterable[CommitStatRecord | Mapping[str, Any]],
    *,
    hour_tolerance: int | None = None,
) -> list[Signal]:
    """Run index building and detection scoped to ``circle``'s members only."""
    me = find_member(circle, user_id)
    if me is None:
        raise NotAMemberError(user_id, circle.id)

    index = build_day_index(records, member_keys(circle.members))
    return detect_signals(
        index,
        me.github_user_id,
        profiles_by_key(circle.members),
        hour_tolerance=hour_tolerance,
    )


def aggregate_recent_signals(
    circles: list[Circle],
    user_id: int,
    load_records: RecordLoader,
    *,
    limit: int | None = None,
    hour_tolerance: int | None = None,
) -> list[Signal]:
    """Detect per circle, tag with circle identity, merge, newest first, capped.

    A circle the user is not part of, or whose records cannot be loaded, is
    skipped with a warning. ``MalformedRecordError`` is not tolerated.
    """
    cap = resolve_override("RECENT_SIGNALS_LIMIT", limit)
    merged: list[Signal] = []

    for circle in circles:
        try:
            records = load_records(circle)
            signals = detect_circle_signals(circle, user_id, records, hour_tolerance=hour_tolerance)
        except (NotAMemberError, DataFetchError) as exc:
            logger.warning("circle_signals_skipped", circle_id=circle.id, user_id=user_id, error=str(exc))
            continue

        merged.extend(
            signal.model_copy(update={"circle_id": circle.id, "circle_name": circle.name})
            for signal in signals
        )

    merged.sort(key=lambda s: s.date, reverse=True)
    logger.info(
        "recent_signals_aggregated",
        user_id=user_id,
        circles=len(circles),
        total=len(merged),
        returned=min(len(merged), cap),
    )
    return merged[:cap]
