"""Taxon name normalization utilities."""


def name_key(raw: object) -> str:
    """
    Case-folded lookup key for a taxon name.

    Examples:
        >>> name_key("  Felis Catus ")
        'felis catus'
        >>> name_key(None)
        ''

    Args:
        raw: Raw name value (can be None, str, or other types)

    Returns:
        Lower-cased, stripped name, or empty string if missing
    """
    if raw is None:
        return ""
    return str(raw).strip().lower()


def contains_query(name: object, query_key: str) -> bool:
    """Case-insensitive substring test; ``query_key`` must already be a name_key."""
    if not query_key or name is None:
        return False
    return query_key in str(name).lower()
