"""Project scaffolding: option collection, template rendering and materialization."""

from .core import ProjectMaterializer
from .options import OptionCollector
from .templates import TemplateEngine

__all__ = [
    "OptionCollector",
    "ProjectMaterializer",
    "TemplateEngine",
]
