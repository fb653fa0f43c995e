from datetime import date, timedelta

import structlog

from coactivity.circles.schemas import MemberKey
from coactivity.commits.index import coerce_record
from coactivity.commits.schemas import CommitStatRecord
from coactivity.connectors.base import CommitStatsConnector
from coactivity.exceptions import CoactivityError, DataFetchError

logger = structlog.get_logger()


def load_commit_stats(
    connector: CommitStatsConnector,
    member_keys: list[MemberKey],
    start_date: date,
    end_date: date,
) -> list[CommitStatRecord]:
    """Fetch window records, turning any connector failure into ``DataFetchError``."""
    try:
        raw = list(connector.fetch_commit_stats(member_keys, start_date, end_date))
    except CoactivityError:
        raise
    except Exception as e:
        logger.error(
            "commit_stats_fetch_failed",
            source=getattr(connector, "source_type", type(connector).__name__),
            members=len(member_keys),
            error=str(e),
        )
        raise DataFetchError("commit stats", str(e)) from e

    records = [coerce_record(r) for r in raw]
    logger.debug(
        "commit_stats_loaded",
        members=len(member_keys),
        start_date=start_date.isoformat(),
        end_date=end_date.isoformat(),
        count=len(records),
    )
    return records


def lookback_window(today: date, days_back: int) -> tuple[date, date]:
    """``(today - days_back, today)``, both ends inclusive."""
    return today - timedelta(days=days_back), today
