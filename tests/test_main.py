"""Tests for the command line demo."""

import argparse

import pytest

import gettranslated.main as cli


def make_args(*texts, **overrides):
    values = {
        "texts": list(texts),
        "api_key": "key",
        "user_id": None,
        "language": None,
        "no_save": False,
        "server_url": None,
        "log_level": None,
        "storage_path": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestRun:
    @pytest.mark.asyncio
    async def test_translates_texts(self, client, settings, capsys):
        code = await cli.run(make_args("Hello", language="fr", user_id="alice"), settings, client=client)
        
        out = capsys.readouterr().out
        assert code == 0
        assert "User: alice" in out
        assert "Languages (3): en, es, fr" in out
        assert "Current language: fr" in out
        assert "Hello -> Hola" in out
        assert client.state.get_user_language_override("alice") == "fr"

    @pytest.mark.asyncio
    async def test_no_save(self, client, settings, capsys):
        await cli.run(make_args(language="fr", user_id="alice", no_save=True), settings, client=client)
        
        assert client.state.get_user_language_override("alice") is None

    @pytest.mark.asyncio
    async def test_translation_error_reported(self, client, server, settings, capsys):
        server.respond("/client/string", status=404)
        
        await cli.run(make_args("Hello"), settings, client=client)
        
        out = capsys.readouterr().out
        assert "Hello -> error (404): HTTP 404: Not found - endpoint or resource not found" in out

    @pytest.mark.asyncio
    async def test_unsupported_language(self, client, settings, capsys):
        code = await cli.run(make_args(language="ja"), settings, client=client)
        
        captured = capsys.readouterr()
        assert code == 0
        assert "Language ja is not supported" in captured.err
        assert "Current language: es" in captured.out

    @pytest.mark.asyncio
    async def test_initialization_failure(self, client, server, settings, capsys):
        server.respond("/client/init", status=401)
        
        code = await cli.run(make_args("Hello"), settings, client=client)
        
        assert code == 1
        assert "Initialization failed (401): Unauthorized - invalid API key" in capsys.readouterr().err


class TestMain:
    def test_parses_arguments(self, monkeypatch):
        captured = {}
        
        async def fake_run(args, settings, client=None):
            captured["args"] = args
            captured["settings"] = settings
            return 0
        
        monkeypatch.setattr(cli, "run", fake_run)
        
        code = cli.main([
            "Hello", "Goodbye",
            "-k", "secret",
            "-l", "fr",
            "--no-save",
            "--log-level", "debug",
            "--storage-path", "/tmp/gettranslated.json",
        ])
        
        args = captured["args"]
        assert code == 0
        assert args.texts == ["Hello", "Goodbye"]
        assert args.api_key == "secret"
        assert args.language == "fr"
        assert args.no_save is True
        assert args.log_level == "debug"
        assert captured["settings"].storage_path == "/tmp/gettranslated.json"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(SystemExit):
            cli.main(["--log-level", "loud"])
