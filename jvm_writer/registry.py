"""
Dialect registry for the source writer.

Maps dialect names, aliases and file extensions to DialectPolicy values.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .dialects import BUILTIN_DIALECTS, DialectPolicy


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class DialectRegistry:
    """Registry for managing available output dialects."""

    def __init__(self):
        """Initialize empty registry."""
        self._dialects: Dict[str, DialectPolicy] = {}
        self._aliases: Dict[str, str] = {}
        self._extensions: Dict[str, str] = {}

    def register(
        self,
        policy: DialectPolicy,
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a dialect policy.

        Args:
            policy: Policy to register under its own name
            aliases: Alternative names for this dialect
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If the policy is invalid or conflicts exist
        """
        if not isinstance(policy, DialectPolicy):
            raise RegistryError("Dialect must be a DialectPolicy instance")

        dialect_key = policy.name.lower()

        if dialect_key in self._dialects and not replace:
            return

        for extension in policy.extensions:
            extension_key = extension.lower()
            owner = self._extensions.get(extension_key)
            if owner is not None and owner != dialect_key and not replace:
                raise RegistryError(
                    f"Extension '{extension}' already belongs to '{owner}'"
                )

        self._dialects[dialect_key] = policy
        for extension in policy.extensions:
            self._extensions[extension.lower()] = dialect_key

        if aliases:
            for alias in aliases:
                alias_key = alias.lower()

                if alias_key == dialect_key:
                    continue

                if not replace:
                    if alias_key in self._dialects:
                        raise RegistryError(
                            f"Alias '{alias}' conflicts with existing primary dialect"
                        )
                    if (
                        alias_key in self._aliases
                        and self._aliases[alias_key] != dialect_key
                    ):
                        raise RegistryError(
                            f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                        )

                self._aliases[alias_key] = dialect_key

    def unregister(self, name: str):
        """Unregister a dialect together with its aliases and extensions."""
        dialect_key = name.lower()
        self._dialects.pop(dialect_key, None)

        for table in (self._aliases, self._extensions):
            for key in [k for k, target in table.items() if target == dialect_key]:
                del table[key]

    def get(self, name: str) -> DialectPolicy:
        """
        Get a dialect by name or alias.

        Raises:
            RegistryError: If the dialect is not registered
        """
        dialect_key = name.lower()

        if dialect_key in self._dialects:
            return self._dialects[dialect_key]

        if dialect_key in self._aliases:
            return self._dialects[self._aliases[dialect_key]]

        raise RegistryError(
            f"No dialect registered for: {name}. "
            f"Available: {', '.join(self.list_dialects())}"
        )

    def for_path(self, path: Union[str, Path]) -> DialectPolicy:
        """
        Select the dialect for an output file from its extension.

        Raises:
            RegistryError: If no dialect claims the extension
        """
        extension = Path(path).suffix.lower()
        dialect_key = self._extensions.get(extension)

        if dialect_key is None:
            raise RegistryError(
                f"No dialect registered for file extension '{extension}' ({path}). "
                f"Known extensions: {', '.join(sorted(self._extensions))}"
            )

        return self._dialects[dialect_key]

    def list_dialects(self) -> List[str]:
        """Get list of registered primary dialect names."""
        return sorted(self._dialects.keys())

    def get_aliases(self, name: str) -> List[str]:
        dialect_key = name.lower()
        return sorted(
            alias for alias, target in self._aliases.items() if target == dialect_key
        )

    def is_supported(self, name: str) -> bool:
        name_key = name.lower()
        return name_key in self._dialects or name_key in self._aliases

    def get_dialect_info(self, name: str) -> Dict[str, Any]:
        """Describe a registered dialect."""
        policy = self.get(name)
        return {
            "name": policy.name,
            "extensions": list(policy.extensions),
            "aliases": self.get_aliases(policy.name),
            "statement_terminator": policy.statement_terminator,
            "serial_version": policy.supports_serial_version,
        }


_global_registry: Optional[DialectRegistry] = None


def get_registry() -> DialectRegistry:
    """Get the global dialect registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = DialectRegistry()
        _register_builtin_dialects(_global_registry)
    return _global_registry


def _register_builtin_dialects(registry: DialectRegistry):
    aliases = {"java": [], "scala": [], "kotlin": ["kt"]}
    for policy in BUILTIN_DIALECTS:
        registry.register(policy, aliases=aliases.get(policy.name))


def get_dialect(name: str) -> DialectPolicy:
    """Get a dialect from the global registry."""
    return get_registry().get(name)


def dialect_for_path(path: Union[str, Path]) -> DialectPolicy:
    """Select a dialect from the global registry by file extension."""
    return get_registry().for_path(path)


def list_dialects() -> List[str]:
    """List all dialects in the global registry."""
    return get_registry().list_dialects()
