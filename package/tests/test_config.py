"""Tests for configuration loading."""

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's environment and .env files."""
    for var in ("TEMPLATE_EDITOR_API_URL", "TEMPLATE_EDITOR_TOKEN",
                "TEMPLATE_EDITOR_TIMEOUT", "TEMPLATE_EDITOR_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def empty_env_file(tmp_path):
    path = tmp_path / ".env"
    path.write_text("")
    return path


class TestLoadConfig:
    """Test config precedence and validation."""

    def test_yaml_file(self, tmp_path, empty_env_file):
        """Test values are read from config.yaml."""
        from template_editor.editor.config import load_config

        config_path = tmp_path / "config.yaml"
        config_path.write_text("api_url: http://localhost:5000/\ntimeout: 3\napi_token: abc\n")

        config = load_config(config_path=config_path, env_file=empty_env_file)

        assert config.api_url == "http://localhost:5000"
        assert config.timeout == 3.0
        assert config.api_token == "abc"
        assert config.redirect_delay == 2.0
        assert config.config_path == config_path

    def test_env_overrides_yaml(self, tmp_path, monkeypatch, empty_env_file):
        """Test environment variables win over config.yaml."""
        from template_editor.editor.config import load_config

        config_path = tmp_path / "config.yaml"
        config_path.write_text("api_url: http://yaml.test\n")
        monkeypatch.setenv("TEMPLATE_EDITOR_API_URL", "http://env.test")

        config = load_config(config_path=config_path, env_file=empty_env_file)

        assert config.api_url == "http://env.test"

    def test_overrides_win(self, tmp_path, monkeypatch, empty_env_file):
        """Test explicit overrides win over the environment."""
        from template_editor.editor.config import load_config

        monkeypatch.setenv("TEMPLATE_EDITOR_API_URL", "http://env.test")

        config = load_config(
            config_path=tmp_path / "missing.yaml",
            env_file=empty_env_file,
            api_url="http://flag.test",
            api_token=None,
        )

        assert config.api_url == "http://flag.test"
        assert config.api_token is None
        assert config.config_path is None

    def test_dotenv_file(self, tmp_path):
        """Test values from a .env file are picked up."""
        from template_editor.editor.config import load_config

        env_file = tmp_path / "custom.env"
        env_file.write_text("TEMPLATE_EDITOR_API_URL=http://dotenv.test\n")

        config = load_config(config_path=tmp_path / "missing.yaml", env_file=env_file)

        assert config.api_url == "http://dotenv.test"

    def test_yaml_overrides_dotenv(self, tmp_path):
        """Test config.yaml wins over .env."""
        from template_editor.editor.config import load_config

        env_file = tmp_path / ".env"
        env_file.write_text("TEMPLATE_EDITOR_API_URL=http://dotenv.test\nTEMPLATE_EDITOR_TOKEN=from-dotenv\n")
        config_path = tmp_path / "config.yaml"
        config_path.write_text("api_url: http://yaml.test\n")

        config = load_config(config_path=config_path, env_file=env_file)

        assert config.api_url == "http://yaml.test"
        assert config.api_token == "from-dotenv"

    def test_env_overrides_dotenv_and_yaml(self, tmp_path, monkeypatch):
        """Test process environment wins over both files."""
        from template_editor.editor.config import load_config

        env_file = tmp_path / ".env"
        env_file.write_text("TEMPLATE_EDITOR_API_URL=http://dotenv.test\n")
        config_path = tmp_path / "config.yaml"
        config_path.write_text("api_url: http://yaml.test\n")
        monkeypatch.setenv("TEMPLATE_EDITOR_API_URL", "http://env.test")

        assert load_config(config_path=config_path, env_file=env_file).api_url == "http://env.test"

    def test_dotenv_not_exported(self, tmp_path):
        """Test reading .env leaves the process environment alone."""
        import os
        from template_editor.editor.config import load_config

        env_file = tmp_path / ".env"
        env_file.write_text("TEMPLATE_EDITOR_API_URL=http://dotenv.test\n")

        load_config(config_path=tmp_path / "missing.yaml", env_file=env_file)

        assert "TEMPLATE_EDITOR_API_URL" not in os.environ

    def test_nearest_dotenv_in_cwd(self, tmp_path):
        """Test the .env in the working directory is used when none is given."""
        from template_editor.editor.config import load_config

        (tmp_path / ".env").write_text("TEMPLATE_EDITOR_API_URL=http://cwd.test\n")

        assert load_config(config_path=tmp_path / "missing.yaml").api_url == "http://cwd.test"

    def test_missing_api_url(self, tmp_path, empty_env_file):
        """Test a missing URL raises ConfigError naming the key."""
        from template_editor.editor.config import load_config
        from template_editor.editor.exceptions import ConfigError

        with pytest.raises(ConfigError) as exc_info:
            load_config(config_path=tmp_path / "missing.yaml", env_file=empty_env_file)

        assert exc_info.value.config_key == "api_url"
        assert "api_url" in str(exc_info.value)

    def test_invalid_api_url(self, tmp_path, empty_env_file):
        """Test a URL without scheme is rejected."""
        from template_editor.editor.config import load_config
        from template_editor.editor.exceptions import ConfigError

        with pytest.raises(ConfigError):
            load_config(config_path=tmp_path / "missing.yaml", env_file=empty_env_file, api_url="localhost:5000")

    def test_invalid_yaml(self, tmp_path, empty_env_file):
        """Test broken YAML raises ConfigError."""
        from template_editor.editor.config import load_config
        from template_editor.editor.exceptions import ConfigError

        config_path = tmp_path / "config.yaml"
        config_path.write_text("api_url: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(config_path=config_path, env_file=empty_env_file)
        assert "Invalid YAML" in exc_info.value.message

    def test_non_mapping_yaml(self, tmp_path, empty_env_file):
        """Test a YAML list at the top level is rejected."""
        from template_editor.editor.config import load_config
        from template_editor.editor.exceptions import ConfigError

        config_path = tmp_path / "config.yaml"
        config_path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            load_config(config_path=config_path, env_file=empty_env_file)

    def test_invalid_timeout(self, tmp_path, empty_env_file):
        """Test a non-numeric timeout is rejected."""
        from template_editor.editor.config import load_config
        from template_editor.editor.exceptions import ConfigError

        with pytest.raises(ConfigError) as exc_info:
            load_config(
                config_path=tmp_path / "missing.yaml",
                env_file=empty_env_file,
                api_url="http://api.test",
                timeout="soon",
            )
        assert exc_info.value.config_key == "timeout"

    def test_display_dict(self, tmp_path, empty_env_file):
        """Test the settings summary values."""
        from template_editor.editor.config import load_config

        config = load_config(
            config_path=tmp_path / "missing.yaml",
            env_file=empty_env_file,
            api_url="http://api.test",
            api_token="secret-value",
        )

        display = config.to_display_dict()
        assert display["api_url"] == "http://api.test"
        assert display["timeout"] == "10s"
