"""
Syntactic model of type references.

A type reference is a dotted path (``com.example.Table.TABLE.ID``) followed
by zero or more bracket groups: ``<...>`` and ``[...]`` generic argument
lists or ``[]`` array suffixes. Nothing here knows about a classpath; names
are handled purely as text.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

IDENTIFIER = r"(?:[^\W\d]|\$)[\w$]*"
QUALIFIED_NAME = rf"(?:{IDENTIFIER}\.)*{IDENTIFIER}"

# Leading dotted path of a type reference; the bracket suffix is scanned separately
TYPE_PATH_PATTERN = re.compile(QUALIFIED_NAME)

# A generic argument that can be resolved on its own. Wildcards, variance
# modifiers, star projections and bounds all fail this pattern.
PLAIN_ARGUMENT_PATTERN = re.compile(rf"{QUALIFIED_NAME}(?:[<\[].*[>\]])?\??", re.S)

BRACKETS = {"<": ">", "[": "]"}


@dataclass(frozen=True)
class TypeReference:
    """A parsed type reference: path segments plus the raw bracket suffix."""

    segments: Tuple[str, ...]
    suffix: str = ""

    @classmethod
    def parse(cls, text: str) -> Optional["TypeReference"]:
        """Parse ``text``, returning None when it is not a type reference."""
        match = TYPE_PATH_PATTERN.match(text)
        if match is None:
            return None

        suffix = text[match.end() :]
        if suffix and (suffix[0] not in "<[" or suffix[-1] not in ">]"):
            return None

        return cls(tuple(match.group(0).split(".")), suffix)

    @property
    def path(self) -> str:
        return ".".join(self.segments)

    def split(self, keep_segments: int) -> Optional[Tuple[str, str, str]]:
        """
        Split the path at the importable class.

        ``keep_segments`` counts the class segment and every member segment
        after it: ``com.example.Table.TABLE.ID`` with 3 gives
        ``("com.example.Table", "Table", "Table.TABLE.ID")``.

        Returns:
            (qualified type, simple name, literal remainder), or None when
            ``keep_segments`` does not leave a package prefix
        """
        if keep_segments < 1 or keep_segments >= len(self.segments):
            return None

        boundary = len(self.segments) - keep_segments
        qualified = ".".join(self.segments[: boundary + 1])
        unqualified = self.segments[boundary]
        remainder = ".".join(self.segments[boundary:])
        return qualified, unqualified, remainder


@dataclass(frozen=True)
class BracketGroup:
    """One top-level bracket group of a suffix such as ``<A, B>`` or ``[]``."""

    opening: str
    closing: str
    body: str
    # None when the group is an array suffix or not a plain argument list
    arguments: Optional[Tuple[str, ...]] = None

    @property
    def text(self) -> str:
        return f"{self.opening}{self.body}{self.closing}"


def split_top_level(body: str, separator: str = ",") -> List[str]:
    """Split ``body`` on ``separator`` occurrences outside any brackets."""
    parts = []
    depth = 0
    start = 0

    for index, char in enumerate(body):
        if char in "<[":
            depth += 1
        elif char in ">]":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(body[start:index])
            start = index + 1

    parts.append(body[start:])
    return parts


def plain_arguments(body: str) -> Optional[Tuple[str, ...]]:
    """
    Return the arguments of a generic list, or None if the list is not plain.

    A plain list is a comma separated sequence of (possibly generic,
    possibly nullable) type names.
    """
    if not body.strip():
        return None

    arguments = tuple(part.strip() for part in split_top_level(body))
    for argument in arguments:
        if not argument or not PLAIN_ARGUMENT_PATTERN.fullmatch(argument):
            return None

    return arguments


def parse_bracket_groups(suffix: str) -> Optional[List[BracketGroup]]:
    """
    Break a suffix into its top-level bracket groups.

    Returns None when the brackets are unbalanced or the suffix contains
    text outside of bracket groups.
    """
    groups = []
    stack: List[str] = []
    start = 0

    for index, char in enumerate(suffix):
        if not stack and char not in BRACKETS:
            return None

        if char in BRACKETS:
            if not stack:
                start = index
            stack.append(BRACKETS[char])
        elif char in ">]":
            if not stack or stack.pop() != char:
                return None
            if not stack:
                body = suffix[start + 1 : index]
                groups.append(
                    BracketGroup(suffix[start], char, body, plain_arguments(body))
                )

    if stack:
        return None

    return groups
