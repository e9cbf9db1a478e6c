"""
Writer for Java, Scala and Kotlin source files.

Type names passed through ``ref`` are shortened while the body is being
written; the import block and the serialVersionUID are only known once the
whole body exists, so both are written as markers and filled in by
``before_close``.
"""

import re
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from .core.config import WriterConfig, load_config
from .core.imports import ImportTable, group_by_top_level
from .core.javadoc import escape_javadoc
from .core.resolver import TypeResolver
from .core.templates import create_template_engine
from .core.writer import GeneratorWriter, WriterError
from .dialects import DialectPolicy
from .logging_config import get_logger
from .registry import RegistryError, dialect_for_path

logger = get_logger(__name__)

SERIAL_STATEMENT = "__SERIAL_STATEMENT__"
IMPORT_STATEMENT = "__IMPORT_STATEMENT__"

# Lines may end with any supported line ending, not only "\n"
PACKAGE_PATTERN = re.compile(
    r"(?:^|(?<=[\r\n]))[ \t]*package[ \t]+([\w$.]+)[ \t]*;?[ \t]*(?=[\r\n]|\Z)"
)

HEADER_RULE = "// " + "-" * 73


def java_string_hash(text: str) -> int:
    """``java.lang.String.hashCode`` of ``text``, stable across runs."""
    data = text.encode("utf-16-be", "surrogatepass")
    value = 0
    for index in range(0, len(data), 2):
        value = (31 * value + ((data[index] << 8) | data[index + 1])) & 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


class JavaWriter(GeneratorWriter):
    """
    Source writer for one generated class.

    The dialect is chosen from the file extension (``.java``, ``.scala``,
    ``.kt``) and the class name from the file name.
    """

    def __init__(
        self,
        path: Union[str, Path],
        fully_qualified_types: Optional[str] = None,
        encoding: Optional[str] = None,
        javadoc: Optional[bool] = None,
        config: Optional[WriterConfig] = None,
    ):
        """
        Args:
            path: Output file
            fully_qualified_types: Regex of qualified names never imported
            encoding: Output encoding, overrides the configuration
            javadoc: Whether doc comments are written, overrides the configuration
            config: Writer configuration; defaults are loaded when omitted

        Raises:
            WriterError: For unknown file extensions or an invalid pattern
        """
        self.config = config if config is not None else load_config()
        super().__init__(
            path, encoding or self.config.encoding, self.config.line_ending
        )

        try:
            self.dialect: DialectPolicy = dialect_for_path(self.path)
        except RegistryError as e:
            raise WriterError(str(e)) from e

        self.class_name = self.path.name[: -len(self.path.suffix)]
        self.javadoc_enabled = self.config.javadoc if javadoc is None else javadoc
        self.tab_string(self.config.indent or self.dialect.indent)

        if fully_qualified_types is None:
            fully_qualified_types = self.config.fully_qualified_types
        try:
            pattern = (
                re.compile(fully_qualified_types)
                if fully_qualified_types is not None
                else None
            )
        except re.error as e:
            raise WriterError(
                f"Invalid fully qualified types pattern {fully_qualified_types!r}: {e}"
            ) from e

        self._imports = ImportTable(sort_key=self.qualified_type_key())
        self._resolver = TypeResolver(
            self.dialect, self.class_name, self._imports, pattern
        )
        self._templates = create_template_engine()
        self._detected_package: Optional[str] = None

    def qualified_type_key(self) -> Optional[Callable[[str], object]]:
        """
        Sort key for the import block.

        Subclasses may override this to order imports differently; None
        keeps lexical order.
        """
        return None

    # File-scope identity and import views

    @property
    def package_name(self) -> Optional[str]:
        return self._resolver.package_name

    @property
    def qualified_types(self) -> List[str]:
        return self._imports.qualified_types

    @property
    def bindings(self) -> Dict[str, str]:
        return self._imports.bindings

    @property
    def imports(self) -> List[str]:
        """Qualified names that get an import statement."""
        package = self._detected_package
        if package is None:
            package = self.package_name or ""
        return self._imports.importable(self.dialect, self.class_name, package)

    # Type references

    def ref_all(
        self, type_names: Optional[Iterable[str]], keep_segments: int = 1
    ) -> List[str]:
        self._check_open()
        return self._resolver.resolve_all(type_names, keep_segments)

    def print_class(self, type_name: str) -> "JavaWriter":
        self.print(self.ref(type_name))
        return self

    # Boilerplate

    def javadoc(self, text: str, *args) -> "JavaWriter":
        """Write a doc comment; only a blank line when doc comments are off."""
        self.println()

        if self.javadoc_enabled:
            escaped_args = [escape_javadoc(arg) for arg in args]
            self.println("/**")
            self.println(" * " + escape_javadoc(text), *escaped_args)
            self.println(" */")

        return self

    def header(self, text: str, *args) -> "JavaWriter":
        self.println()
        self.println(HEADER_RULE)
        self.println("// " + text, *args)
        self.println(HEADER_RULE)
        return self

    def override(self) -> "JavaWriter":
        self.println("@Override")
        return self

    def override_if(self, override: bool) -> "JavaWriter":
        if override:
            self.override()
        return self

    def override_inherit(self) -> "JavaWriter":
        self.println()
        self.override()
        return self

    def override_inherit_if(self, override: bool) -> "JavaWriter":
        self.println()
        return self.override_if(override)

    def print_serial(self):
        """Declare a serialVersionUID derived from the finished body."""
        if self.dialect.supports_serial_version:
            self.println()
            self.println(
                "private static final long serialVersionUID = %s;", SERIAL_STATEMENT
            )

    def print_package_specification(self, package_name: str):
        self._check_open()
        self._resolver.package_name = package_name
        self.println(self.dialect.package_statement(package_name))

    def print_imports(self):
        """Mark where the import block goes."""
        self.println(IMPORT_STATEMENT)

    # Finalization

    def _detect_package(self, text: str) -> str:
        match = PACKAGE_PATTERN.search(text)
        if match is None:
            logger.debug("No package declaration in %s", self.path)
            return ""
        return match.group(1)

    def _render_imports(self, package_name: str) -> str:
        names = self._imports.importable(self.dialect, self.class_name, package_name)
        groups = [
            [self.dialect.import_statement(name) for name in group]
            for group in group_by_top_level(names)
        ]
        return self._templates.render_template(
            "imports", {"groups": groups, "newline": self.newline_string()}
        )

    def before_close(self, text: str) -> str:
        text = super().before_close(text)

        self._detected_package = self._detect_package(text)
        if self.package_name and not self._detected_package:
            logger.warning(
                "Declared package %s of %s not found in body; "
                "same-package types are imported",
                self.package_name,
                self.path,
            )
        elif self.package_name and self._detected_package != self.package_name:
            logger.warning(
                "Body of %s declares package %s instead of %s; "
                "imports are filtered against %s",
                self.path,
                self._detected_package,
                self.package_name,
                self._detected_package,
            )

        import_block = self._render_imports(self._detected_package)
        serial = str(java_string_hash(text))
        self._imports.freeze()

        return text.replace(IMPORT_STATEMENT, import_block).replace(
            SERIAL_STATEMENT, serial
        )
