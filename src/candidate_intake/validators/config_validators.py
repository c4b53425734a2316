def to_uppercase(value: str | None) -> str | None:
    """Upper-case a settings value, leaving None alone."""
    return value.upper() if isinstance(value, str) else value


def to_lowercase(value: str | None) -> str | None:
    """Lower-case a settings value, leaving None alone."""
    return value.lower() if isinstance(value, str) else value
