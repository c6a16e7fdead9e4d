MAX_QUERY_LENGTH = 500


def sanitize_input(value):
    """
    Normalize untrusted query text before it is stored or matched.
    Trims surrounding whitespace, drops every "<" and ">" and caps the length.

    Non-string values are passed through untouched; type checks belong to
    the request schema.

    Example:
        sanitize_input("  <b>recursion</b> ")  # -> "brecursion/b"
    """
    if not isinstance(value, str):
        return value

    cleaned = value.strip().replace("<", "").replace(">", "")
    return cleaned[:MAX_QUERY_LENGTH]
