"""
Tests for INI-backed settings
"""

import pytest

from filterkit.core import RunConfig
from filterkit.services import Settings


@pytest.fixture
def ini_file(tmp_path):
    def _write(body):
        path = tmp_path / "filterkit.ini"
        path.write_text(body)
        return path
    return _write


class TestSettings:
    """Test reading settings and building RunConfig"""

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = Settings(tmp_path / "absent.ini")
        assert settings.to_run_config() == RunConfig()
        assert settings.get_log_level() == "WARNING"
        assert not (tmp_path / "absent.ini").exists()

    def test_values_from_file(self, ini_file):
        path = ini_file(
            "[run]\n"
            "input_path = photos/cat.png\n"
            "output_dir = results\n"
            "quality = 85\n"
            "progress_cadence = 0.1\n"
            "parallel = no\n"
            "strict = yes\n"
            "log_level = debug\n"
        )
        settings = Settings(path)
        config = settings.to_run_config()
        assert config == RunConfig(
            input_path="photos/cat.png",
            output_dir="results",
            quality=85,
            progress_cadence=0.1,
            parallel=False,
            strict=True,
        )
        assert settings.get_log_level() == "DEBUG"

    def test_partial_file(self, ini_file):
        settings = Settings(ini_file("[run]\nquality = 70\n"))
        config = settings.to_run_config()
        assert config.quality == 70
        assert config.input_path == "input.jpg"
        assert config.parallel is True

    def test_invalid_value_falls_back(self, ini_file, caplog):
        settings = Settings(ini_file("[run]\nquality = high\nparallel = maybe\n"))
        assert settings.get_quality() == 100
        assert settings.get_parallel() is True
        assert "Invalid value for quality" in caplog.text

    def test_empty_value_uses_default(self, ini_file):
        settings = Settings(ini_file("[run]\noutput_dir =\n"))
        assert settings.get_output_dir() == "."

    def test_malformed_file_is_ignored(self, ini_file, caplog):
        settings = Settings(ini_file("quality = 5\n"))
        assert settings.to_run_config() == RunConfig()
        assert "Ignoring unreadable settings file" in caplog.text

    def test_undecodable_file_is_ignored(self, tmp_path, caplog):
        path = tmp_path / "filterkit.ini"
        path.write_bytes(b"[run]\nquality = \xff\xfe80\n")
        settings = Settings(path)
        assert settings.to_run_config() == RunConfig()
        assert "Ignoring unreadable settings file" in caplog.text

    def test_overrides(self, ini_file):
        settings = Settings(ini_file("[run]\nquality = 70\ninput_path = a.jpg\n"))
        config = settings.to_run_config(input_path="b.jpg", quality=None, parallel=False)
        assert config.input_path == "b.jpg"
        assert config.quality == 70
        assert config.parallel is False

    def test_unknown_override(self, tmp_path):
        with pytest.raises(TypeError):
            Settings(tmp_path / "absent.ini").to_run_config(colour="red")
