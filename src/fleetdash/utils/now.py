from datetime import UTC, datetime, tzinfo


class Now:
    @staticmethod
    def as_datetime(tz: tzinfo | None = None) -> datetime:
        """Return the current time as an aware datetime (UTC unless ``tz`` is given)."""

        return datetime.now(tz or UTC)

    @staticmethod
    def to_zone(dt: datetime, tz: tzinfo) -> datetime:
        """Convert a datetime to ``tz``; naive values are assumed to be UTC."""

        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt.astimezone(tz)
