def to_uppercase(value: str | None) -> str | None:
    """
    Upper-case a raw environment value, passing None through.
    """
    if value is None:
        return None
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Lower-case a raw environment value, passing None through.
    """
    if value is None:
        return None
    return value.strip().lower()


def normalize_url_prefix(value: str | None) -> str:
    """
    Turn 'api/v1/', '/api/v1' or '' into a router prefix: one leading slash,
    no trailing slash ('' stays '').
    """
    if not value:
        return ""
    stripped = value.strip().strip("/")
    return f"/{stripped}" if stripped else ""
