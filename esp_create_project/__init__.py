"""esp-create-project - scaffold new ESP-IDF projects from the official template."""

__version__ = "0.1.0"
