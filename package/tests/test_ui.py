"""Tests for UI helpers and rendering."""

import io

from rich.console import Console


def make_ui():
    from template_editor.editor.ui import EditorUI

    output = io.StringIO()
    return EditorUI(Console(file=output, width=120)), output


class TestResolveChoice:
    """Test menu input matching."""

    def test_number_and_name(self):
        from template_editor.editor.ui import resolve_choice

        choices = ["technical", "soft_skills", "experience"]
        assert resolve_choice("2", choices) == "soft_skills"
        assert resolve_choice(" Experience ", choices) == "experience"

    def test_out_of_range(self):
        from template_editor.editor.ui import resolve_choice

        assert resolve_choice("0", ["a", "b"]) is None
        assert resolve_choice("3", ["a", "b"]) is None
        assert resolve_choice("", ["a", "b"]) is None


class TestPromptText:
    """Test free text input."""

    def test_blank_keeps_default(self):
        from unittest.mock import patch

        ui, _ = make_ui()
        with patch("template_editor.editor.ui.Prompt.ask", return_value="First-round screen"):
            assert ui.prompt_text("Description", default="First-round screen", clearable=True) == "First-round screen"

    def test_dash_clears_clearable_field(self):
        """Test '-' empties a field that already has a value."""
        from unittest.mock import patch

        ui, _ = make_ui()
        with patch("template_editor.editor.ui.Prompt.ask", return_value=" - "):
            assert ui.prompt_text("Description", default="First-round screen", clearable=True) == ""

    def test_dash_is_literal_when_not_clearable(self):
        from unittest.mock import patch

        ui, _ = make_ui()
        with patch("template_editor.editor.ui.Prompt.ask", return_value="-"):
            assert ui.prompt_text("Keyword", default="python") == "-"


class TestRendering:
    """Test the screen sections."""

    def test_keywords_empty_state(self):
        ui, output = make_ui()
        ui.show_keywords({}, {})
        assert "No keywords yet" in output.getvalue()

    def test_keyword_chips_show_weight(self):
        """Test weight is shown only when above 1."""
        from template_editor.editor.models import CATEGORY_ICONS, Keyword, PersistedId

        ui, output = make_ui()
        groups = {"technical": [
            Keyword(id=PersistedId("k-1"), keyword="python", category="technical", weight=3),
            Keyword(id=PersistedId("k-2"), keyword="docker", category="technical", weight=1),
        ]}
        ui.show_keywords(groups, CATEGORY_ICONS)

        text = output.getvalue()
        assert "python 3x" in text
        assert "docker 1x" not in text
        assert "TECHNICAL (2)" in text

    def test_settings_hide_token(self):
        ui, output = make_ui()
        ui.show_settings({"api_url": "http://api.test", "api_token": "abc123", "config_file": ""})

        text = output.getvalue()
        assert "abc123" not in text
        assert "http://api.test" in text
        assert "not set" in text
