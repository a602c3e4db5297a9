"""contextlingo - settings import/export for the ContextLingo vocabulary extension."""

__version__ = "0.1.0"
