"""Tests for settings."""

from theshit.config import Settings


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self) -> None:
        """Test defaults with an empty environment."""
        settings = Settings.from_env({})

        assert settings.require_confirmation is True
        assert settings.no_colors is False
        assert settings.debug is False
        assert settings.wait_command == 3
        assert settings.num_close_matches == 3
        assert settings.search_path == ""

    def test_flags(self) -> None:
        """Test boolean flags are true only for 'true'."""
        settings = Settings.from_env(
            {
                "THESHIT_REQUIRE_CONFIRMATION": "false",
                "THESHIT_NO_COLORS": "true",
                "THESHIT_DEBUG": "yes",
            }
        )

        assert settings.require_confirmation is False
        assert settings.no_colors is True
        assert settings.debug is False

    def test_integers(self) -> None:
        """Test integer settings."""
        settings = Settings.from_env({"THESHIT_WAIT_COMMAND": "10", "THESHIT_NUM_CLOSE_MATCHES": "5"})

        assert settings.wait_command == 10
        assert settings.num_close_matches == 5

    def test_invalid_integer_keeps_default(self) -> None:
        """Test that garbage falls back to the default."""
        settings = Settings.from_env({"THESHIT_HISTORY_LIMIT": "lots"})

        assert settings.history_limit == 9999

    def test_non_positive_integer_keeps_default(self) -> None:
        """Test that zero and negative counts fall back to the default."""
        assert Settings.from_env({"THESHIT_NUM_CLOSE_MATCHES": "0"}).num_close_matches == 3
        assert Settings.from_env({"THESHIT_NUM_CLOSE_MATCHES": "-1"}).num_close_matches == 3
        assert Settings.from_env({"THESHIT_WAIT_COMMAND": "0"}).wait_command == 3

    def test_paths(self) -> None:
        """Test PATH, SHELL and HOME are picked up."""
        settings = Settings.from_env({"PATH": "/usr/bin:/bin", "SHELL": "/bin/zsh", "HOME": "/home/u"})

        assert settings.search_path == "/usr/bin:/bin"
        assert settings.shell == "/bin/zsh"
        assert settings.home == "/home/u"

    def test_reads_os_environ(self, monkeypatch) -> None:
        """Test the process environment is the default source."""
        monkeypatch.setenv("THESHIT_DEBUG", "true")

        assert Settings.from_env().debug is True
