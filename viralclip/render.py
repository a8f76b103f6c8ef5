"""Terminal rendering for clip results."""

from typing import Iterator

from viralclip.controller import ClipController
from viralclip.models import Caption, Clip
from viralclip.utils import clip_duration, find_active_caption

ANSI_COLORS = {
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
}
ANSI_RESET = "\033[0m"

HEADER = "ViralClip AI - Find Viral Clips in Seconds"
EMPTY_STATE = (
    "Your AI-generated clips will appear here\n"
    "Ready to discover the best moments from your videos?"
)
LOADING_INDICATOR = "Generating clips... AI is analyzing the video."


def virality_band(score: float) -> str:
    if score > 8:
        return "green"
    if score > 6:
        return "yellow"
    return "red"


def colorize(text: str, band: str, enabled: bool = True) -> str:
    if not enabled:
        return text
    return f"{ANSI_COLORS[band]}{text}{ANSI_RESET}"


def render_header() -> str:
    rule = "=" * len(HEADER)
    return f"{rule}\n{HEADER}\n{rule}"


def render_clip_card(clip: Clip, index: int = 1, color: bool = False) -> str:
    band = virality_band(clip.virality_score)
    score = colorize(f"{clip.virality_score:.1f}", band, enabled=color)
    lines = [
        f"#{index} {clip.title}",
        f"  {clip.start_time} - {clip.end_time}  (Duration: {clip_duration(clip):.1f}s)",
        f"  Virality Score: {score} [{band}]",
        f"  {clip.summary}",
        "  [ Download Clip ]",
    ]
    return "\n".join(lines)


def render_state(controller: ClipController, color: bool = False) -> str:
    """Render whatever the controller currently holds, the way the page would show it."""
    if controller.error:
        return f"Error: {controller.error}"
    if controller.is_loading:
        return LOADING_INDICATOR
    if not controller.clips:
        return EMPTY_STATE

    cards = [
        render_clip_card(clip, index, color=color)
        for index, clip in enumerate(controller.clips, start=1)
    ]
    return "Generated Clips\n\n" + "\n\n".join(cards)


def simulate_playback(clip: Clip, step: float = 1.0) -> Iterator[tuple[float, Caption | None]]:
    """Yield (position, caption on screen) while stepping through the clip."""
    if step <= 0:
        raise ValueError("step must be positive")

    duration = clip_duration(clip)
    tick = 0
    position = 0.0
    while position <= duration:
        yield position, find_active_caption(position, clip.captions)
        tick += 1
        position = tick * step


def render_playback(clip: Clip, step: float = 1.0) -> str:
    lines = []
    for position, caption in simulate_playback(clip, step):
        text = caption.text if caption else ""
        lines.append(f"  [{position:5.1f}s] {text}".rstrip())
    return "\n".join(lines)
