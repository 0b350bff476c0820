import math


def parse_concurrency_token(token) -> float | None:
    """
    Reads a document version out of an If-Match style token.

    Accepts `3`, `"3"` and `W/"3"`. Any finite number is a version to compare,
    so `"0.0"` names version 0 and `"1.5"` names no version at all. Returns
    None for missing or non-numeric tokens, which means the caller does not
    want a version check.
    """
    if token is None:
        return None
    value = str(token).strip()
    if value.startswith("W/"):
        value = value[2:].strip()
    value = value.strip('"').strip()
    try:
        version = float(value)
    except ValueError:
        return None
    return version if math.isfinite(version) else None
