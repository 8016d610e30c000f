import logging

from bowlscore.utils import sentry


def test_no_dsn_skips_sentry(monkeypatch):
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    assert sentry.sentry_options() is None
    assert sentry.init_sentry() is False


def test_sample_rates_come_from_environment(monkeypatch):
    monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example.com/1")
    monkeypatch.setenv("SENTRY_ENVIRONMENT", " staging ")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.25")
    monkeypatch.delenv("SENTRY_PROFILES_SAMPLE_RATE", raising=False)
    options = sentry.sentry_options()
    assert options == {
        "dsn": "https://key@sentry.example.com/1",
        "environment": "staging",
        "traces_sample_rate": 0.25,
        "profiles_sample_rate": 0.0,
    }


def test_bad_sample_rate_falls_back_with_warning(monkeypatch, caplog):
    monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example.com/1")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "often")
    with caplog.at_level(logging.WARNING):
        options = sentry.sentry_options()
    assert options["traces_sample_rate"] == 0.0
    assert "SENTRY_TRACES_SAMPLE_RATE is not a valid float" in caplog.text


def test_init_sentry_passes_options(monkeypatch):
    calls = []
    monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example.com/1")
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kwargs: calls.append(kwargs))
    assert sentry.init_sentry() is True
    assert calls[0]["dsn"] == "https://key@sentry.example.com/1"
    assert len(calls[0]["integrations"]) == 1
