"""Error taxonomy for co-activity computations."""


class CoactivityError(Exception):
    """Base exception for all coactivity errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class CircleNotFoundError(CoactivityError):
    """Raised when the membership lookup has no circle with the given id."""

    def __init__(self, circle_id: int):
        super().__init__("Circle not found", details={"circle_id": str(circle_id)})
        self.circle_id = circle_id


class NotAMemberError(CoactivityError):
    """Raised when the requesting user does not belong to the circle being compared."""

    def __init__(
        self,
        user_id: int | None = None,
        circle_id: int | None = None,
        *,
        member_key: int | None = None,
    ):
        details = {}
        if user_id is not None:
            details["user_id"] = str(user_id)
        if member_key is not None:
            details["member_key"] = str(member_key)
        if circle_id is not None:
            details["circle_id"] = str(circle_id)
        super().__init__("User is not a member of this circle", details=details)
        self.user_id = user_id
        self.circle_id = circle_id
        self.member_key = member_key


class DataFetchError(CoactivityError):
    """Raised when a commit-stats or membership connector fails."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to fetch {source}", details={"source": source, "reason": reason})
        self.source = source
        self.reason = reason


class MalformedRecordError(CoactivityError):
    """Raised when a commit-stats record cannot be folded (bad date, hour out of range, ...).

    This is a contract violation by the data source, so the whole request
    fails instead of silently dropping the record.
    """

    def __init__(self, record: object, reason: str):
        super().__init__(
            "Malformed commit stats record",
            details={"record": repr(record)[:200], "reason": reason},
        )
        self.record = record
        self.reason = reason
