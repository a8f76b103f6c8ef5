import json

import pytest

from viralclip import cli
from viralclip.config import Config
from viralclip.exceptions import ConfigurationError, ServiceError
from viralclip.models import Caption, Clip


def _clip(title: str) -> Clip:
    return Clip(title, "00:10", "00:40", "summary", 9.0, (Caption(0, 1, "hey"),))


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setattr(cli, "load_config", lambda _path: Config())
    monkeypatch.setattr(cli, "setup_logging", lambda *_args, **_kwargs: None)
    monkeypatch.setattr(cli, "check_credentials", lambda _provider: None)


def test_missing_credentials_refuse_to_start(monkeypatch, capsys):
    monkeypatch.setattr(cli, "load_config", lambda _path: Config())
    monkeypatch.setattr(cli, "setup_logging", lambda *_args, **_kwargs: None)
    monkeypatch.setattr(
        cli, "check_credentials", lambda _provider: ConfigurationError("gemini provider requires GEMINI_API_KEY")
    )
    monkeypatch.setattr(cli, "request_clips", lambda *_args, **_kwargs: pytest.fail("no request expected"))

    with pytest.raises(SystemExit) as exc:
        cli.main(["https://youtu.be/a"])

    assert exc.value.code == 1
    assert "Configuration error: gemini provider requires GEMINI_API_KEY" in capsys.readouterr().out


def test_missing_config_file_exits_cleanly(monkeypatch, capsys):
    def _raise(_path):
        raise ConfigurationError("Config file not found: x.toml")

    monkeypatch.setattr(cli, "load_config", _raise)
    monkeypatch.setattr(cli, "setup_logging", lambda *_args, **_kwargs: None)

    with pytest.raises(SystemExit) as exc:
        cli.main(["https://youtu.be/a", "--config", "x.toml"])

    assert exc.value.code == 1
    assert "Config file not found: x.toml" in capsys.readouterr().out


def test_empty_url_shows_validation_message(monkeypatch, capsys, configured):
    monkeypatch.setattr(cli, "request_clips", lambda *_args, **_kwargs: pytest.fail("no request expected"))

    with pytest.raises(SystemExit) as exc:
        cli.main([""])

    assert exc.value.code == 1
    assert "Please enter a YouTube URL." in capsys.readouterr().out


def test_prints_cards_for_each_clip(monkeypatch, capsys, configured):
    seen = {}

    def fake_request(url, provider, model):
        seen.update(url=url, provider=provider, model=model)
        return [_clip(f"Clip {i}") for i in range(1, 5)]

    monkeypatch.setattr(cli, "request_clips", fake_request)

    cli.main(["https://youtu.be/a", "--openai", "--model", "gpt-test"])

    out = capsys.readouterr().out
    assert seen == {"url": "https://youtu.be/a", "provider": "openai", "model": "gpt-test"}
    assert "Generated Clips" in out
    assert out.count("[ Download Clip ]") == 4


def test_provider_and_model_fall_back_to_config(monkeypatch, configured):
    seen = {}
    monkeypatch.setattr(cli, "load_config", lambda _path: Config(provider="ollama"))

    def fake_request(url, provider, model):
        seen.update(provider=provider, model=model)
        return []

    monkeypatch.setattr(cli, "request_clips", fake_request)

    cli.main(["https://youtu.be/a"])

    assert seen == {"provider": "ollama", "model": "llama3"}


def test_service_failure_shows_generic_message(monkeypatch, capsys, configured):
    def failing(*_args, **_kwargs):
        raise ServiceError("upstream 500")

    monkeypatch.setattr(cli, "request_clips", failing)

    with pytest.raises(SystemExit) as exc:
        cli.main(["https://youtu.be/a"])

    assert exc.value.code == 1
    out = capsys.readouterr().out
    assert "Failed to generate clips. Please check the URL or try again later." in out
    assert "upstream 500" not in out


def test_json_output(monkeypatch, capsys, configured):
    monkeypatch.setattr(cli, "request_clips", lambda *_args, **_kwargs: [_clip("Only")])

    cli.main(["https://youtu.be/a", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload == [_clip("Only").to_dict()]


def test_play_prints_caption_timeline(monkeypatch, capsys, configured):
    monkeypatch.setattr(cli, "request_clips", lambda *_args, **_kwargs: [_clip("Playable")])

    cli.main(["https://youtu.be/a", "--play", "--step", "10"])

    out = capsys.readouterr().out
    assert "#1 Playable" in out
    assert "[  0.0s] hey" in out
    assert "[ 30.0s]" in out


def test_non_positive_step_is_rejected(configured):
    with pytest.raises(SystemExit) as exc:
        cli.main(["https://youtu.be/a", "--step", "0"])

    assert exc.value.code == 2
