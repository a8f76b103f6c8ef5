import math
from typing import Sequence

from viralclip.models import Caption, Clip


def _to_number(part: str) -> float | None:
    try:
        value = float(part)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_to_seconds(time_str: object) -> float:
    """Convert MM:SS to seconds. Anything else (HH:MM:SS, SS, garbage) yields 0."""
    if not isinstance(time_str, str):
        return 0.0

    parts = time_str.split(":")
    if len(parts) != 2:
        return 0.0

    minutes = _to_number(parts[0])
    seconds = _to_number(parts[1])
    if minutes is None or seconds is None:
        return 0.0
    return minutes * 60 + seconds


def clip_duration(clip: Clip) -> float:
    return parse_to_seconds(clip.end_time) - parse_to_seconds(clip.start_time)


def find_active_caption(position: float, captions: Sequence[Caption]) -> Caption | None:
    """Return the first caption whose [start, end] interval contains position.

    Both bounds are inclusive, so at a shared boundary the earlier caption wins.
    """
    for caption in captions:
        if caption.start_time <= position <= caption.end_time:
            return caption
    return None
