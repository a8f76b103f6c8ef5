import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from viralclip.exceptions import ConfigurationError

DEFAULT_PROVIDER = "gemini"

MODEL_DEFAULTS = {
    "gemini": "gemini-2.5-pro",
    "openai": "gpt-4o-mini",
    "ollama": "llama3",
}

# Checked in order; the first variable that is set wins.
API_KEY_VARIABLES = {
    "gemini": ("GEMINI_API_KEY", "API_KEY"),
    "openai": ("OPENAI_API_KEY",),
    "ollama": (),
}

CONFIG_SEARCH_PATHS = [
    Path("config.toml"),
    Path.home() / ".config" / "viralclip" / "config.toml",
]

ENV_SEARCH_PATHS = [
    Path(".env"),
    Path(".env.local"),
]


@dataclass
class Config:
    provider: str | None = None
    model: str | None = None


def load_dotenv() -> None:
    """Pull API keys from .env then .env.local; a key already exported in the shell wins."""
    merged: dict[str, str] = {}
    for env_path in ENV_SEARCH_PATHS:
        if not env_path.exists():
            continue
        values = dotenv_values(env_path)
        for key, value in values.items():
            if value is not None:
                merged[key] = value

    for key, value in merged.items():
        os.environ.setdefault(key, value)


def load_config(path: str | None = None) -> Config:
    """Load config from TOML file.

    Search order: explicit path > ./config.toml > ~/.config/viralclip/config.toml
    Missing config file is not an error (defaults are used) unless it was asked for explicitly.
    """
    load_dotenv()

    config_path = None
    if path:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
    else:
        for candidate in CONFIG_SEARCH_PATHS:
            if candidate.exists():
                config_path = candidate
                break

    if config_path is None:
        return Config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid config file {config_path}: {exc}") from exc

    ai = data.get("ai", {})
    return Config(provider=ai.get("provider"), model=ai.get("model"))


def resolve_api_key(provider: str) -> str | None:
    for name in API_KEY_VARIABLES.get(provider, ()):
        value = os.environ.get(name)
        if value:
            return value
    return None


def check_credentials(provider: str) -> ConfigurationError | None:
    """Startup check: return the problem instead of raising it, None when ready."""
    if provider not in API_KEY_VARIABLES:
        valid_providers = ", ".join(API_KEY_VARIABLES)
        return ConfigurationError(f"Unknown provider '{provider}'. Expected one of: {valid_providers}")

    names = API_KEY_VARIABLES[provider]
    if names and resolve_api_key(provider) is None:
        return ConfigurationError(
            f"{provider} provider requires {' or '.join(names)} to be set in the environment."
        )
    return None
