import logging

from viralclip.config import DEFAULT_PROVIDER, MODEL_DEFAULTS
from viralclip.exceptions import ConfigurationError, ServiceError
from viralclip.models import Clip
from viralclip.parsing import parse_ai_response
from viralclip.prompts import build_prompt
from viralclip.providers import find_clips

logger = logging.getLogger(__name__)


def request_clips(url: str, provider: str = DEFAULT_PROVIDER, model: str | None = None) -> list[Clip]:
    """Ask the model for clip suggestions for url.

    One round trip, no retry and no timeout of our own. Every failure surfaces as
    ServiceError (FormatError when the JSON has the wrong shape) with the cause chained.
    """
    model = model or MODEL_DEFAULTS.get(provider)
    if not model:
        raise ConfigurationError(f"No model configured for provider '{provider}'")

    prompt = build_prompt(url)
    logger.info("Requesting clips for %s with %s (%s)", url, provider, model)

    try:
        raw_response = find_clips(provider, prompt, model)
        clips = parse_ai_response(raw_response)
    except (ConfigurationError, ServiceError):
        raise
    except Exception as exc:
        raise ServiceError(f"Failed to communicate with the AI service: {exc}") from exc

    logger.info("Received %d clips for %s", len(clips), url)
    return clips
