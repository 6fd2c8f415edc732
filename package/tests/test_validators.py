"""Tests for template editor field validators."""

import pytest


class TestFieldValidators:
    """Test form field validation functions."""

    def test_validate_title(self):
        """Test titles must have visible characters."""
        from template_editor.editor.validators import validate_title

        assert validate_title("Screen")[0] is True
        valid, msg = validate_title("   ")
        assert valid is False
        assert msg == "title required"

    @pytest.mark.parametrize("value", [30, 60, 90, 120, 180, 300, "90"])
    def test_validate_time_limit_allowed(self, value):
        """Test every offered time limit is accepted."""
        from template_editor.editor.validators import validate_time_limit

        assert validate_time_limit(value)[0] is True

    @pytest.mark.parametrize("value", [0, 45, 600, "soon", None])
    def test_validate_time_limit_rejected(self, value):
        """Test values outside the offered set are rejected."""
        from template_editor.editor.validators import validate_time_limit

        assert validate_time_limit(value)[0] is False

    def test_validate_weight(self):
        """Test weight options."""
        from template_editor.editor.validators import validate_weight

        assert validate_weight(1)[0] is True
        assert validate_weight(5)[0] is True
        assert validate_weight(2.0)[0] is True
        assert validate_weight(4)[0] is False
        assert validate_weight(2.5)[0] is False
        assert validate_weight("heavy")[0] is False

    def test_validate_category(self):
        """Test category options."""
        from template_editor.editor.validators import validate_category

        assert validate_category("soft_skills")[0] is True
        valid, msg = validate_category("Soft Skills")
        assert valid is False
        assert "technical" in msg

    def test_validate_keyword_text(self):
        """Test keyword text must survive normalization."""
        from template_editor.editor.validators import validate_keyword_text

        assert validate_keyword_text(" Go ")[0] is True
        assert validate_keyword_text("\t ")[0] is False

    def test_validate_api_url(self):
        """Test backend URL format."""
        from template_editor.editor.validators import validate_api_url

        assert validate_api_url("https://interviews.example.com")[0] is True
        assert validate_api_url("")[0] is False
        valid, msg = validate_api_url("interviews.example.com")
        assert valid is False
        assert "http" in msg
