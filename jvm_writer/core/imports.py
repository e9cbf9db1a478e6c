"""
Import bookkeeping for a single generated file.

The table records which simple name stands for which qualified name and
which qualified names need an import statement. Filtering and grouping
happen only when the finished file is rendered.
"""

import re
from typing import Callable, Dict, List, Optional

from ..dialects import DialectPolicy
from ..logging_config import get_logger

logger = get_logger(__name__)


class ImportTable:
    """Simple name bindings and import obligations of one file."""

    def __init__(self, sort_key: Optional[Callable[[str], object]] = None):
        """
        Args:
            sort_key: Ordering of qualified names in the import block.
                Defaults to lexical order.
        """
        self._sort_key = sort_key
        self._bindings: Dict[str, str] = {}
        self._qualified_types = set()
        self._frozen = False

    def binding(self, simple_name: str) -> Optional[str]:
        return self._bindings.get(simple_name)

    def can_bind(self, simple_name: str, qualified_name: str) -> bool:
        """A simple name may only ever stand for one qualified name."""
        existing = self._bindings.get(simple_name)
        return existing is None or existing == qualified_name

    def bind(self, simple_name: str, qualified_name: str, register: bool = True):
        """
        Bind ``simple_name`` to ``qualified_name``.

        Args:
            register: Also record the qualified name as needing an import.
        """
        if self._frozen:
            raise RuntimeError("Import table is frozen after finalization")
        if not self.can_bind(simple_name, qualified_name):
            raise ValueError(
                f"{simple_name} is already bound to {self._bindings[simple_name]}"
            )

        self._bindings[simple_name] = qualified_name
        if register:
            self._qualified_types.add(qualified_name)

    def freeze(self):
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def qualified_types(self) -> List[str]:
        return sorted(self._qualified_types, key=self._sort_key)

    @property
    def bindings(self) -> Dict[str, str]:
        return dict(sorted(self._bindings.items()))

    def __contains__(self, qualified_name: str) -> bool:
        return qualified_name in self._qualified_types

    def __len__(self) -> int:
        return len(self._qualified_types)

    def importable(
        self, dialect: DialectPolicy, class_name: str, package_name: str = ""
    ) -> List[str]:
        """
        Qualified names that need an import statement in the emitted file.

        Entries the dialect imports implicitly, references to the file's
        own class name and types from the file's own package are skipped.
        """
        same_package = (
            re.compile(re.escape(package_name) + r"\.[^.]+") if package_name else None
        )
        result = []

        for qualified_name in self.qualified_types:
            if dialect.is_ambient(qualified_name):
                logger.debug("Skipping implicit import %s", qualified_name)
                continue

            if qualified_name.endswith("." + class_name):
                logger.debug("Skipping import of own class name %s", qualified_name)
                continue

            if same_package is not None and same_package.fullmatch(qualified_name):
                logger.debug("Skipping same-package import %s", qualified_name)
                continue

            result.append(qualified_name)

        return result


def group_by_top_level(qualified_names: List[str]) -> List[List[str]]:
    """
    Group consecutive names sharing their first package segment.

    ``[java.util.List, java.util.Map, org.jooq.Field]`` gives
    ``[[java.util.List, java.util.Map], [org.jooq.Field]]``.
    """
    groups: List[List[str]] = []
    previous = None

    for qualified_name in qualified_names:
        top_level = qualified_name.split(".")[0]
        if top_level != previous:
            groups.append([])
        groups[-1].append(qualified_name)
        previous = top_level

    return groups
