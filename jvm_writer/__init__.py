"""
JVM Source Writer

Writes Java, Scala and Kotlin source files for schema code generators,
shortening type references and computing the import block.
"""

from .core.config import ConfigError, WriterConfig, load_config
from .core.writer import GeneratorWriter, WriterError, WriterIOError
from .dialects import JAVA, KOTLIN, SCALA, DialectPolicy
from .java_writer import JavaWriter
from .registry import (
    DialectRegistry,
    RegistryError,
    dialect_for_path,
    get_dialect,
    list_dialects,
)

__version__ = "0.1.0"

__all__ = [
    "JavaWriter",
    "GeneratorWriter",
    "WriterError",
    "WriterIOError",
    "DialectPolicy",
    "JAVA",
    "SCALA",
    "KOTLIN",
    "DialectRegistry",
    "RegistryError",
    "dialect_for_path",
    "get_dialect",
    "list_dialects",
    "WriterConfig",
    "ConfigError",
    "load_config",
]
