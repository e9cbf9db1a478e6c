"""
Template engine wrapper for source writers.

Provides a small interface over Jinja2 for the fixed text blocks
the writer renders during finalization.
"""

from typing import Any, Dict

from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


# One blank line opens every group; each statement ends with the newline string
IMPORT_BLOCK_TEMPLATE = (
    "{% for group in groups %}{{ newline }}"
    "{% for statement in group %}{{ statement }}{{ newline }}{% endfor %}"
    "{% endfor %}"
)


class TemplateEngine:
    """Wrapper for a Jinja2 environment holding in-memory templates."""

    def __init__(self, templates: Dict[str, str] = None):
        self._env = Environment(
            loader=DictLoader(dict(templates or {})),
            autoescape=select_autoescape([], default_for_string=False),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of a registered template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {e}"
            ) from e

    def add_template(self, name: str, content: str):
        """Add or replace an in-memory template."""
        self._env.loader.mapping[name] = content

    def template_exists(self, name: str) -> bool:
        return name in self._env.loader.mapping


def create_template_engine() -> TemplateEngine:
    """Create an engine preloaded with the writer's built-in templates."""
    return TemplateEngine({"imports": IMPORT_BLOCK_TEMPLATE})
