"""Command-line HTML document editor with undo/redo, spell checking and tree views."""

__version__ = "0.1.0"