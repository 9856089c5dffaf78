from app.core.config import Settings
from app.core.strings import get_string


def test_block_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("COURSE_RECENT_DEFAULT", "8")
    monkeypatch.setenv("COURSE_RECENT_MUSTHAVEROLE", "true")
    settings = Settings(_env_file=None)
    assert settings.course_recent_default == 8
    assert settings.course_recent_musthaverole is True


def test_block_settings_defaults(monkeypatch):
    monkeypatch.delenv("COURSE_RECENT_DEFAULT", raising=False)
    monkeypatch.delenv("COURSE_RECENT_MUSTHAVEROLE", raising=False)
    settings = Settings(_env_file=None)
    assert settings.course_recent_default == 5
    assert settings.course_recent_musthaverole is False


def test_block_settings_carry_admin_labels():
    fields = Settings.model_fields
    assert fields["course_recent_default"].title == get_string("default_max")
    assert fields["course_recent_default"].description == get_string("default_max_desc")
    assert fields["course_recent_musthaverole"].title == get_string("musthaverole")
    assert fields["course_recent_musthaverole"].description == get_string("musthaverole_desc")


def test_settings_reads_dotenv_file():
    assert Settings.model_config["env_file"] == ".env"
    assert Settings.model_config["env_file_encoding"] == "utf-8"
