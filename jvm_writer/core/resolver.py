"""
Type reference resolution.

Decides, for every qualified type name written into a file, whether the
short name can be used (recording an import) or whether the name has to
stay fully qualified.
"""

import re
from typing import Iterable, List, Optional, Pattern, Union

from ..dialects import DialectPolicy
from ..logging_config import get_logger
from .imports import ImportTable
from .types import BracketGroup, TypeReference, parse_bracket_groups

logger = get_logger(__name__)

# Generic arguments nested deeper than this are written as given
MAX_GENERIC_DEPTH = 32


class TypeResolver:
    """Shortens qualified type names for one generated file."""

    def __init__(
        self,
        dialect: DialectPolicy,
        class_name: str,
        import_table: Optional[ImportTable] = None,
        fully_qualified_types: Union[str, Pattern, None] = None,
    ):
        """
        Args:
            dialect: Policy of the file being generated
            class_name: Name of the file's top-level class
            import_table: Table receiving bindings; a new one by default
            fully_qualified_types: Regex of names that are never shortened
        """
        self.dialect = dialect
        self.class_name = class_name
        self.package_name: Optional[str] = None
        self.imports = import_table if import_table is not None else ImportTable()

        if isinstance(fully_qualified_types, str):
            fully_qualified_types = re.compile(fully_qualified_types)
        self.fully_qualified_types = fully_qualified_types

    def resolve(self, type_name: str, keep_segments: int = 1) -> str:
        """
        Return the text to write in place of ``type_name``.

        Args:
            type_name: Qualified name, optionally with generic arguments
            keep_segments: Number of trailing segments, the class included,
                that are written literally (3 for ``pkg.Table.TABLE.ID``)

        Returns:
            The shortened reference, or ``type_name`` unchanged when it
            cannot be imported safely
        """
        return self._resolve(type_name, keep_segments, depth=0)

    def resolve_all(
        self, type_names: Optional[Iterable[str]], keep_segments: int = 1
    ) -> List[str]:
        if type_names is None:
            return []
        return [self._resolve(name, keep_segments, depth=0) for name in type_names]

    def is_self_reference(self, qualified_name: str) -> bool:
        return (
            self.package_name is not None
            and qualified_name == f"{self.package_name}.{self.class_name}"
        )

    def _resolve(self, type_name: str, keep_segments: int, depth: int) -> str:
        # Unqualified and primitive types
        if "." not in type_name:
            return type_name

        type_name = self.dialect.patch_type(type_name)

        if self.fully_qualified_types is not None:
            if self.fully_qualified_types.fullmatch(type_name):
                return type_name

        reference = TypeReference.parse(type_name)
        if reference is None:
            logger.debug("Not a type reference, writing as is: %s", type_name)
            return type_name

        parts = reference.split(keep_segments)
        if parts is None:
            logger.debug(
                "Cannot keep %d segments of %s, writing as is", keep_segments, type_name
            )
            return type_name

        groups = parse_bracket_groups(reference.suffix)
        if groups is None:
            logger.debug("Unbalanced brackets, writing as is: %s", type_name)
            return type_name

        qualified_type, unqualified_type, remainder = parts
        self_reference = self.is_self_reference(qualified_type)

        # Another class with this file's name stays qualified
        if unqualified_type == self.class_name and not self_reference:
            logger.debug("%s clashes with the generated class name", qualified_type)
            return type_name

        if not self.imports.can_bind(unqualified_type, qualified_type):
            logger.debug(
                "%s already stands for %s, keeping %s qualified",
                unqualified_type,
                self.imports.binding(unqualified_type),
                qualified_type,
            )
            return type_name

        self.imports.bind(unqualified_type, qualified_type, register=not self_reference)

        if self_reference and keep_segments > 1 and self.dialect.static_members_in_scope:
            # Table.TABLE.ID inside Table is just TABLE.ID
            remainder = remainder.split(".", 1)[1]

        return remainder + self._resolve_groups(groups, depth)

    def _resolve_groups(self, groups: List[BracketGroup], depth: int) -> str:
        if depth >= MAX_GENERIC_DEPTH:
            logger.debug("Generic arguments nested deeper than %d", MAX_GENERIC_DEPTH)
            return "".join(group.text for group in groups)

        rendered = []
        for group in groups:
            if group.arguments is None:
                rendered.append(group.text)
                continue

            arguments = [
                self._resolve_argument(argument, depth + 1)
                for argument in group.arguments
            ]
            rendered.append(group.opening + ", ".join(arguments) + group.closing)

        return "".join(rendered)

    def _resolve_argument(self, argument: str, depth: int) -> str:
        # Kotlin nullable marker
        if argument.endswith("?"):
            return self._resolve(argument[:-1], 1, depth) + "?"
        return self._resolve(argument, 1, depth)
