from astrocore import config


def test_backend_defaults_to_swieph(monkeypatch):
    monkeypatch.delenv("EPHEMERIS_BACKEND", raising=False)
    assert config.ephemeris_backend() == "swieph"


def test_backend_moseph_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("EPHEMERIS_BACKEND", " MoSeph ")
    assert config.ephemeris_backend() == "moseph"


def test_unknown_backend_falls_back(monkeypatch):
    monkeypatch.setenv("EPHEMERIS_BACKEND", "jpl")
    assert config.ephemeris_backend() == "swieph"


def test_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert config.log_level() == "DEBUG"
    monkeypatch.delenv("LOG_LEVEL")
    assert config.log_level() == "INFO"


def test_ephemeris_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("EPHEMERIS_DIR", str(tmp_path))
    assert config.ephemeris_dir() == str(tmp_path)
