from datetime import datetime, timezone


def utcnow():
    """
    Returns the current UTC datetime without tzinfo, matching what the
    database columns store
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today():
    """
    Returns the current UTC date
    """
    return utcnow().date()
