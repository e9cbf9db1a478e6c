"""
Escaping for text placed inside documentation comments.

Schema comments end up verbatim in generated doc blocks, so any comment
delimiter they contain has to be broken up before it is printed.
"""

from typing import Any

# Java unicode escapes are decoded before lexing, so these close comments too
_STAR = "\\" + "u002a"
_SLASH = "\\" + "u002f"

_REPLACEMENTS = (
    ("/*", "/ *"),
    ("*/", "* /"),
    ("/" + _STAR, "/ " + _STAR),
    (_STAR + "/", _STAR + " /"),
    ("*" + _SLASH, "* " + _SLASH),
    (_SLASH + "*", _SLASH + " *"),
    (_STAR + _SLASH, _STAR + " " + _SLASH),
    (_SLASH + _STAR, _SLASH + " " + _STAR),
)


def escape_javadoc_text(text: str) -> str:
    """Insert a space into every comment opener and closer in ``text``."""
    for dangerous, safe in _REPLACEMENTS:
        text = text.replace(dangerous, safe)
    return text


def escape_javadoc(value: Any) -> Any:
    """
    Escape a doc string or formatting argument.

    Strings are escaped, lists and tuples are escaped element-wise keeping
    their type, anything else is returned unchanged.
    """
    if isinstance(value, str):
        return escape_javadoc_text(value)
    if isinstance(value, (list, tuple)):
        return type(value)(escape_javadoc(item) for item in value)
    return value
