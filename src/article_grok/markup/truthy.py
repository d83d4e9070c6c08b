"""Boolean interpretation of attribute values."""

TRUTHY_VALUES = frozenset({"1", "true", "yes"})


def is_truthy(value: str | None) -> bool:
    """Interpret an attribute value as a boolean.

    Args:
        value: Attribute value as delivered by the parser, or None if the
            attribute is absent

    Returns:
        True if the value is one of the truthy tokens (case-insensitive)

    Examples:
        >>> is_truthy("Yes")
        True
        >>> is_truthy("0")
        False
    """
    if not value:
        return False
    return value.lower() in TRUTHY_VALUES
