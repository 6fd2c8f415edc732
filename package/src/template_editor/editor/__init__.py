"""
Template Editing Screen

Local editing state, list editors and the two-phase save for one
interview template.
"""

from template_editor.editor.session import EditSession
from template_editor.editor.ui import EditorUI

__all__ = ["EditSession", "EditorUI"]
