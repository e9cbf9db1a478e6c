"""
Core source writing components.

Provides the text writer, type reference resolution and import
bookkeeping used by the dialect writers.
"""

from .config import ConfigError, ConfigManager, WriterConfig, load_config
from .imports import ImportTable, group_by_top_level
from .javadoc import escape_javadoc
from .resolver import TypeResolver
from .templates import TemplateEngine, TemplateError, create_template_engine
from .types import TypeReference, parse_bracket_groups
from .writer import GeneratorWriter, WriterError, WriterIOError

__all__ = [
    # Text writer
    "GeneratorWriter",
    "WriterError",
    "WriterIOError",
    # Type references and imports
    "TypeReference",
    "parse_bracket_groups",
    "TypeResolver",
    "ImportTable",
    "group_by_top_level",
    # Doc comments
    "escape_javadoc",
    # Configuration system
    "WriterConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
