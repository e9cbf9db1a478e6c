"""
Dialect policies for the JVM source writer.

Each supported output flavour is described by one immutable DialectPolicy
value. The writer picks a policy once, from the output file extension, and
consults it for import syntax, implicit imports and native type names.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class DialectPolicy:
    """
    Immutable capability table for one output dialect.

    Policies are shared between writers, so nothing here may change after
    construction.
    """

    name: str
    extensions: Tuple[str, ...]
    indent: str = "    "
    statement_terminator: str = ";"
    import_keyword: str = "import"
    # Qualified names starting with one of these are never imported
    ambient_prefixes: Tuple[str, ...] = field(default_factory=tuple)
    # Names directly under these namespaces (one extra segment) are never imported
    ambient_single_segment: Tuple[str, ...] = field(default_factory=tuple)
    # Boxed JVM types replaced by the dialect's native name before resolving
    native_types: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    # Template wrapping an element type when rewriting "X[]" array suffixes
    array_type: Optional[str] = None
    supports_serial_version: bool = False
    # Whether a class body sees its own static members without qualification
    static_members_in_scope: bool = True

    @property
    def native_type_map(self) -> Dict[str, str]:
        return dict(self.native_types)

    def patch_type(self, type_name: str) -> str:
        """Rewrite boxed and array types into the dialect's native spelling."""
        if self.array_type is None and not self.native_types:
            return type_name

        depth = 0
        element = type_name
        if self.array_type is not None:
            while element.endswith("[]"):
                element = element[:-2]
                depth += 1

        element = self.native_type_map.get(element, element)
        for _ in range(depth):
            element = self.array_type % element

        return element

    def is_ambient(self, qualified_name: str) -> bool:
        """Check whether the dialect imports this type implicitly."""
        for prefix in self.ambient_prefixes:
            if qualified_name.startswith(prefix):
                return True

        # kotlin.Int is implicit, kotlin.collections.List is not
        for prefix in self.ambient_single_segment:
            if qualified_name.startswith(prefix):
                if "." not in qualified_name[len(prefix):]:
                    return True

        return False

    def import_statement(self, qualified_name: str) -> str:
        return f"{self.import_keyword} {qualified_name}{self.statement_terminator}"

    def package_statement(self, package_name: str) -> str:
        return f"package {package_name}{self.statement_terminator}"


JAVA = DialectPolicy(
    name="java",
    extensions=(".java",),
    indent="    ",
    statement_terminator=";",
    ambient_prefixes=("java.lang.",),
    supports_serial_version=True,
)

SCALA = DialectPolicy(
    name="scala",
    extensions=(".scala",),
    indent="  ",
    statement_terminator="",
    static_members_in_scope=False,
)

KOTLIN = DialectPolicy(
    name="kotlin",
    extensions=(".kt",),
    indent="    ",
    statement_terminator="",
    ambient_prefixes=("java.lang.",),
    ambient_single_segment=("kotlin.",),
    native_types=(
        ("java.lang.Integer", "kotlin.Int"),
        ("java.lang.Object", "kotlin.Any"),
    ),
    array_type="kotlin.Array<%s?>",
)

BUILTIN_DIALECTS = (JAVA, SCALA, KOTLIN)
