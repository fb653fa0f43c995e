from datetime import date

import structlog

from coactivity.circles.membership import is_member, member_keys
from coactivity.circles.schemas import Circle
from coactivity.commits.schemas import CommitStatRecord
from coactivity.commits.service import load_commit_stats, lookback_window
from coactivity.config import resolve_override
from coactivity.connectors.base import CircleConnector, CommitStatsConnector
from coactivity.exceptions import CircleNotFoundError, CoactivityError, DataFetchError, NotAMemberError
from coactivity.signals.aggregation import aggregate_recent_signals, detect_circle_signals
from coactivity.signals.schemas import Signal

logger = structlog.get_logger()


class SignalService:
    """Entry points for the circle signal view and the cross-circle recent view."""

    def __init__(
        self,
        circles: CircleConnector,
        commit_stats: CommitStatsConnector,
        *,
        window_days: int | None = None,
        limit: int | None = None,
        hour_tolerance: int | None = None,
    ):
        self.circles = circles
        self.commit_stats = commit_stats
        self.window_days = resolve_override("SIGNAL_WINDOW_DAYS", window_days)
        self.limit = resolve_override("RECENT_SIGNALS_LIMIT", limit)
        self.hour_tolerance = resolve_override("SAME_HOUR_TOLERANCE", hour_tolerance)

    def get_signals(self, user_id: int, circle_id: int, today: date | None = None) -> list[Signal]:
        """Signals between ``user_id`` and the other members of one circle.

        Raises ``CircleNotFoundError``, ``NotAMemberError`` or ``DataFetchError``.
        """
        circle = self._get_circle(circle_id)
        if not is_member(circle, user_id):
            raise NotAMemberError(user_id, circle_id)

        records = self._load_window(circle, today)
        signals = detect_circle_signals(circle, user_id, records, hour_tolerance=self.hour_tolerance)
        logger.info("circle_signals_detected", circle_id=circle_id, user_id=user_id, count=len(signals))
        return signals

    def get_recent_signals(self, user_id: int, today: date | None = None) -> list[Signal]:
        """Most recent signals across every circle ``user_id`` belongs to."""
        try:
            circles = self.circles.list_circles_for_user(user_id)
        except CoactivityError:
            raise
        except Exception as e:
            logger.error("circle_list_fetch_failed", user_id=user_id, error=str(e))
            raise DataFetchError("circles", str(e)) from e

        return aggregate_recent_signals(
            circles,
            user_id,
            lambda circle: self._load_window(circle, today),
            limit=self.limit,
            hour_tolerance=self.hour_tolerance,
        )

    def _get_circle(self, circle_id: int) -> Circle:
        try:
            circle = self.circles.get_circle(circle_id)
        except CoactivityError:
            raise
        except Exception as e:
            logger.error("circle_fetch_failed", circle_id=circle_id, error=str(e))
            raise DataFetchError("circle", str(e)) from e
        if circle is None:
            raise CircleNotFoundError(circle_id)
        return circle

    def _load_window(self, circle: Circle, today: date | None) -> list[CommitStatRecord]:
        start_date, end_date = lookback_window(today or date.today(), self.window_days)
        return load_commit_stats(self.commit_stats, member_keys(circle.members), start_date, end_date)
