"""Tests for the application entry point."""

import importlib

import ddtrace

import transcript_functions.main


class TestMain:
    def test_tracing_is_patched_when_module_loads(self, monkeypatch):
        calls = []

        def record_patch(**integrations):
            calls.append(integrations)

        monkeypatch.setattr(ddtrace, "patch", record_patch)

        module = importlib.reload(transcript_functions.main)

        assert calls == [{"fastapi": True, "grpc": True}]
        assert module.app.title == "Transcript Functions"

    def test_main_serves_module_app(self, monkeypatch):
        import uvicorn

        served = []
        monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: served.append((app, kwargs)))
        monkeypatch.setenv("PORT", "9090")

        transcript_functions.main.main()

        app, kwargs = served[0]
        assert app is transcript_functions.main.app
        assert kwargs["port"] == 9090
        assert kwargs["log_config"] is None
