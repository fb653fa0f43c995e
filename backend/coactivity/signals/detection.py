"""Pairwise co-activity detection between one member and the rest of a circle.

For every date the requesting member committed, each other member active on
that same date is compared along three axes:

  same_day:      one signal per date listing every co-active peer
  same_hour:     primary commit hours within ``SAME_HOUR_TOLERANCE`` of each other,
                 one signal per (peer, peer hour)
  same_language: a language both used that day, one signal per (peer, language)

Iteration is deterministic: dates newest first, peers in circle member order,
hours ascending, languages alphabetical.
"""

from collections.abc import Mapping

import structlog

from coactivity.circles.schemas import MemberKey, MemberProfile
from coactivity.commits.index import DayIndex
from coactivity.commits.schemas import DayAggregate
from coactivity.config import resolve_override
from coactivity.exceptions import NotAMemberError
from coactivity.signals.schemas import (
    SAME_DAY_DETAIL,
    Signal,
    SignalKey,
    SignalKind,
    SignalUser,
    hour_detail,
)

logger = structlog.get_logger()


def _signal_user(profile: MemberProfile) -> SignalUser:
    return SignalUser(github_username=profile.github_username, avatar_url=profile.avatar_url)


def _co_active_peers(
    index: DayIndex,
    peers: list[MemberKey],
    date_key: str,
) -> list[tuple[MemberKey, DayAggregate]]:
    active = []
    for peer in peers:
        day = index.get(peer, {}).get(date_key)
        if day is not None and day.has_commit:
            active.append((peer, day))
    return active


def _matching_hours(mine: set[int], theirs: set[int], tolerance: int) -> list[int]:
    """Peer hours lying within ``tolerance`` of any of our hours, ascending."""
    return [
        peer_hour
        for peer_hour in sorted(theirs)
        if any(abs(my_hour - peer_hour) <= tolerance for my_hour in mine)
    ]


def detect_signals(
    index: DayIndex,
    self_key: MemberKey,
    profiles: Mapping[MemberKey, MemberProfile],
    *,
    hour_tolerance: int | None = None,
) -> list[Signal]:
    """Detect co-activity signals between ``self_key`` and every other profiled member.

    ``index`` must come from ``build_day_index`` over the same members; the date
    window is whatever records were folded into it. Raises ``NotAMemberError``
    when ``self_key`` is absent from ``profiles`` or from the index.

    Returns signals sorted by date descending; within a date, discovery order.
    """
    if self_key not in profiles or self_key not in index:
        raise NotAMemberError(member_key=self_key)

    tolerance = resolve_override("SAME_HOUR_TOLERANCE", hour_tolerance)
    peers = [key for key in profiles if key != self_key]

    signals: list[Signal] = []
    seen: set[SignalKey] = set()

    for date_key in sorted(index[self_key], reverse=True):
        mine = index[self_key][date_key]
        if not mine.has_commit:
            continue

        active = _co_active_peers(index, peers, date_key)
        if not active:
            continue

        same_day = SignalKey(SignalKind.SAME_DAY, date_key, SAME_DAY_DETAIL)
        if same_day not in seen:
            seen.add(same_day)
            signals.append(Signal(
                type=SignalKind.SAME_DAY,
                date=date_key,
                users=[_signal_user(profiles[peer]) for peer, _ in active],
                detail=SAME_DAY_DETAIL,
            ))

        for peer, theirs in active:
            peer_user = _signal_user(profiles[peer])

            for peer_hour in _matching_hours(mine.hours, theirs.hours, tolerance):
                key = SignalKey(SignalKind.SAME_HOUR, date_key, hour_detail(peer_hour), peer)
                if key in seen:
                    continue
                seen.add(key)
                signals.append(Signal(
                    type=SignalKind.SAME_HOUR,
                    date=date_key,
                    users=[peer_user],
                    detail=key.detail,
                ))

            for language in sorted(mine.languages & theirs.languages):
                key = SignalKey(SignalKind.SAME_LANGUAGE, date_key, language, peer)
                if key in seen:
                    continue
                seen.add(key)
                signals.append(Signal(
                    type=SignalKind.SAME_LANGUAGE,
                    date=date_key,
                    users=[peer_user],
                    detail=language,
                ))

    # list.sort is stable, so same-date signals keep discovery order
    signals.sort(key=lambda s: s.date, reverse=True)
    logger.debug("signals_detected", member=str(self_key), count=len(signals))
    return signals
