"""
Interview Template Editor

Terminal admin screen for editing interview templates, their questions
and AI-scoring keywords.
"""

try:
    from importlib.metadata import version
    __version__ = version("interview-template-editor")
except Exception:
    __version__ = "0.0.0"  # Fallback for development

__all__ = ["__version__"]
