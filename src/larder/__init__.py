"""Recipe page extraction into structured, editable previews."""

__version__ = "0.1.0"
