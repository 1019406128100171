"""Text shaping helpers shared by the clip store, menu labels and previews.

All limits count user-perceived characters (extended grapheme clusters), so
an emoji sequence or a letter with combining marks is never split. A
non-positive limit yields an empty string.
"""

import regex

MENU_EMPTY_PLACEHOLDER = "(Empty Clip)"
ELLIPSIS = "…"

_GRAPHEME = regex.compile(r"\X")


def graphemes(text: str) -> list:
    return _GRAPHEME.findall(text)


def character_count(text: str) -> int:
    return len(graphemes(text))


def _prefix(text: str, limit: int) -> str:
    return "".join(graphemes(text)[:limit])


def normalized_line_breaks(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def collapse_to_single_line(text: str) -> str:
    return " ".join(segment for segment in text.split() if segment)


def _strip_trailing_whitespace(text: str) -> str:
    return text.rstrip()


def _truncated_tail(text: str, limit: int) -> str:
    if limit <= 0:
        return ""
    if character_count(text) <= limit:
        return text
    return _strip_trailing_whitespace(_prefix(text, limit)) + ELLIPSIS


def menu_label(name: str, text: str, limit: int) -> str:
    """Label shown for a clip in the menu.

    Falls back to the clip text when the name is blank and to
    ``MENU_EMPTY_PLACEHOLDER`` when both are blank.
    """
    trimmed_name = name.strip()
    source = trimmed_name if trimmed_name else text
    collapsed = collapse_to_single_line(source)
    if not collapsed:
        return MENU_EMPTY_PLACEHOLDER
    return _truncated_tail(collapsed, limit)


def plain_prefix(text: str, limit: int) -> str:
    """Default clip name derived from new content (no ellipsis)."""
    if limit <= 0:
        return ""

    collapsed = collapse_to_single_line(text)
    if character_count(collapsed) <= limit:
        return collapsed
    return _strip_trailing_whitespace(_prefix(collapsed, limit))


def preview(text: str, limit: int, empty_placeholder: str = "No text yet") -> str:
    if limit <= 0:
        return ""

    collapsed = collapse_to_single_line(text)
    if not collapsed:
        return empty_placeholder
    if character_count(collapsed) <= limit:
        return collapsed
    return _prefix(collapsed, limit) + ELLIPSIS


def bounded(text: str, max_length: int) -> str:
    if max_length <= 0:
        return ""
    if character_count(text) <= max_length:
        return text
    return _prefix(text, max_length)


def bounded_single_line_title(text: str, limit: int) -> str:
    if limit <= 0:
        return ""

    single_line = normalized_line_breaks(text).replace("\n", " ")
    return bounded(single_line, limit)
