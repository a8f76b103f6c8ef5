import json
import logging

from viralclip.config import resolve_api_key
from viralclip.exceptions import ConfigurationError, FormatError, ServiceError
from viralclip.prompts import CLIP_LIST_SCHEMA, SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def _strict_object_schema(schema: dict) -> dict:
    """Copy a JSON schema, closing every object as OpenAI strict mode requires."""
    result = dict(schema)
    if result.get("type") == "object":
        result["additionalProperties"] = False
        result["properties"] = {
            name: _strict_object_schema(child) for name, child in schema["properties"].items()
        }
    if "items" in schema:
        result["items"] = _strict_object_schema(schema["items"])
    return result


def _to_gemini_schema(schema: dict, types):
    kwargs = {"type": types.Type(schema["type"].upper())}
    if "description" in schema:
        kwargs["description"] = schema["description"]
    if "properties" in schema:
        kwargs["properties"] = {
            name: _to_gemini_schema(child, types) for name, child in schema["properties"].items()
        }
    if "required" in schema:
        kwargs["required"] = list(schema["required"])
    if "items" in schema:
        kwargs["items"] = _to_gemini_schema(schema["items"], types)
    return types.Schema(**kwargs)


def find_clips_openai(prompt: str, model: str) -> str:
    try:
        from openai import OpenAI
    except ImportError as exc:
        raise ConfigurationError(
            "OpenAI provider unavailable. Install dependency: pip install openai"
        ) from exc

    # Structured outputs need an object at the root, so the list travels under "clips".
    envelope = {
        "type": "object",
        "properties": {"clips": CLIP_LIST_SCHEMA},
        "required": ["clips"],
    }
    client = OpenAI(api_key=resolve_api_key("openai"))
    try:
        response = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "clip_list",
                    "strict": True,
                    "schema": _strict_object_schema(envelope),
                },
            },
        )
        content = response.choices[0].message.content
    except Exception as exc:
        raise ServiceError(f"OpenAI request failed: {exc}") from exc

    if not content:
        raise ServiceError("OpenAI returned an empty response.")
    return _unwrap_clips_envelope(content)


def _unwrap_clips_envelope(content: str) -> str:
    """Turn the {"clips": [...]} object OpenAI sends back into the bare clip array."""
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ServiceError(f"Invalid JSON: {exc.msg}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("clips"), list):
        raise FormatError("Invalid response shape: expected an object with a 'clips' array.")
    return json.dumps(payload["clips"])


def find_clips_gemini(prompt: str, model: str) -> str:
    try:
        from google import genai
        from google.genai import types
    except ImportError as exc:
        raise ConfigurationError(
            "Gemini provider unavailable. Install dependency: pip install google-genai"
        ) from exc

    api_key = resolve_api_key("gemini")
    if not api_key:
        raise ConfigurationError("Gemini provider requires GEMINI_API_KEY or API_KEY to be set.")

    client = genai.Client(api_key=api_key)
    try:
        response = client.models.generate_content(
            model=model,
            contents=f"{SYSTEM_PROMPT}\n\n{prompt}",
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=_to_gemini_schema(CLIP_LIST_SCHEMA, types),
            ),
        )
        content = response.text
    except Exception as exc:
        raise ServiceError(f"Gemini request failed: {exc}") from exc

    if not content:
        raise ServiceError("Gemini returned an empty response.")
    return content.strip()


def find_clips_ollama(prompt: str, model: str) -> str:
    try:
        import ollama
    except ImportError as exc:
        raise ConfigurationError(
            "Ollama provider unavailable. Install dependency: pip install ollama"
        ) from exc

    try:
        response = ollama.chat(
            model=model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            format=CLIP_LIST_SCHEMA,
        )
        content = response["message"]["content"]
    except Exception as exc:
        raise ServiceError(f"Ollama request failed: {exc}") from exc

    if not content:
        raise ServiceError("Ollama returned an empty response.")
    return content.strip()


def find_clips(provider: str, prompt: str, model: str) -> str:
    provider_handlers = {
        "gemini": find_clips_gemini,
        "openai": find_clips_openai,
        "ollama": find_clips_ollama,
    }
    handler = provider_handlers.get(provider)
    if handler is None:
        valid_providers = ", ".join(provider_handlers.keys())
        raise ConfigurationError(f"Unknown provider '{provider}'. Expected one of: {valid_providers}")

    logger.debug("Requesting clips from %s (%s)", provider, model)
    return handler(prompt, model)
