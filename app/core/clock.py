from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current time; used for audit timestamps."""
    return datetime.now(timezone.utc)
