import json
import re

from viralclip.exceptions import FormatError, ServiceError
from viralclip.models import Clip

REQUIRED_STRING_FIELDS = ("title", "startTime", "endTime", "summary")
REQUIRED_CAPTION_NUMBER_FIELDS = ("startTime", "endTime")


def _decode_response(text: str) -> object:
    """Decode the model reply; local models sometimes wrap it in a ```json fence."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        fenced = re.search(r"```(?:json)?\s*([\s\S]*?)```", text, flags=re.IGNORECASE)
        if fenced is None:
            raise ServiceError(f"Invalid JSON: {error.msg}") from error
        try:
            return json.loads(fenced.group(1))
        except json.JSONDecodeError as fenced_error:
            raise ServiceError(f"Invalid JSON: {fenced_error.msg}") from fenced_error


def _require_clip_list(payload: object) -> list:
    if not isinstance(payload, list):
        raise FormatError(
            f"Invalid response shape: expected a JSON array of clips, got {type(payload).__name__}."
        )
    return payload


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_caption(caption: object, clip_index: int, caption_index: int) -> None:
    label = f"Clip {clip_index} caption {caption_index}"
    if not isinstance(caption, dict):
        raise FormatError(f"{label} must be a JSON object.")

    missing = [field for field in (*REQUIRED_CAPTION_NUMBER_FIELDS, "text") if field not in caption]
    if missing:
        raise FormatError(f"{label} missing required field(s): {', '.join(missing)}.")

    for field in REQUIRED_CAPTION_NUMBER_FIELDS:
        if not _is_number(caption[field]):
            raise FormatError(f"{label} field '{field}' must be a number.")
    if not isinstance(caption["text"], str):
        raise FormatError(f"{label} field 'text' must be a string.")


def _validate_clip(clip: object, clip_index: int) -> Clip:
    """Check one element against the clip shape. Field types only, not ranges."""
    if not isinstance(clip, dict):
        raise FormatError(f"Clip {clip_index} must be a JSON object.")

    required = (*REQUIRED_STRING_FIELDS, "viralityScore", "captions")
    missing = [field for field in required if field not in clip]
    if missing:
        raise FormatError(f"Clip {clip_index} missing required field(s): {', '.join(missing)}.")

    for field in REQUIRED_STRING_FIELDS:
        if not isinstance(clip[field], str):
            raise FormatError(f"Clip {clip_index} field '{field}' must be a string.")
    if not _is_number(clip["viralityScore"]):
        raise FormatError(f"Clip {clip_index} field 'viralityScore' must be a number.")
    if not isinstance(clip["captions"], list):
        raise FormatError(f"Clip {clip_index} field 'captions' must be an array.")

    for caption_index, caption in enumerate(clip["captions"], start=1):
        _validate_caption(caption, clip_index, caption_index)

    return Clip.from_dict(clip)


def parse_ai_response(text: str) -> list[Clip]:
    clips = _require_clip_list(_decode_response(text.strip()))
    return [_validate_clip(clip, index + 1) for index, clip in enumerate(clips)]
