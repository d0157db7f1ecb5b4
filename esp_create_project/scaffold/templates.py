"""Template engine for the generated source stubs."""
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import BaseLoader, Environment, TemplateError

from esp_create_project.core.errors import ProjectIOError


class TemplateEngine:
    """Renders the packaged jinja2 templates (``<name>.j2``)."""

    def __init__(self, template_dir: Optional[Path] = None):
        # Engine is in esp_create_project/scaffold/, templates are in esp_create_project/templates/
        self.template_dir = template_dir or Path(__file__).parent.parent / "templates"
        self.jinja_env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            keep_trailing_newline=True,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with the given context.

        Raises:
            ProjectIOError: If the template is missing or fails to render
        """
        template_path = self.template_dir / f"{template_name}.j2"
        if not template_path.exists():
            raise ProjectIOError(f"Template '{template_name}' not found at {template_path}")

        try:
            template = self.jinja_env.from_string(template_path.read_text())
            return template.render(**context)
        except TemplateError as e:
            raise ProjectIOError(f"Failed to render template '{template_name}': {e}") from e
