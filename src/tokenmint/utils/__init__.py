import time


def utc_timestamp() -> int:
    """Current time as whole seconds since the epoch (JWT NumericDate)."""
    return int(time.time())
