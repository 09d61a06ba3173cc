# app/services/database/search_utils.py
LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """Lower-cased LIKE pattern matching `text` anywhere, with % and _ taken literally."""
    escaped = (
        text.strip().lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
