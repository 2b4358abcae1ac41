def clamp_limit(limit: int | None, default=50, max_=100):
    return default if limit is None else min(max(limit, 1), max_)


def clamp_offset(offset: int | None):
    return 0 if offset is None else max(offset, 0)
