"""Logic for converting tag values to display text."""


def tag_text(v: object, separator: str = ", ") -> str:
    """Convert a tag value to a string, joining repeated values."""
    if v is None:
        return ""
    if isinstance(v, str):
        return v.strip()
    if isinstance(v, list):
        return separator.join(tag_text(x) for x in v if tag_text(x))
    return str(v).strip()
