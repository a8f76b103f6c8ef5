import pytest

from viralclip import render
from viralclip.controller import ClipController
from viralclip.models import Caption, Clip


def _clip(title: str = "Hook", score: float = 8.5) -> Clip:
    return Clip(
        title=title,
        start_time="01:10",
        end_time="01:45",
        summary="Why it works.",
        virality_score=score,
        captions=(Caption(0, 2, "first"), Caption(2, 4, "second")),
    )


def _controller(**state) -> ClipController:
    controller = ClipController(lambda _url: pytest.fail("no request expected"))
    for name, value in state.items():
        setattr(controller, name, value)
    return controller


@pytest.mark.parametrize(
    ("score", "band"),
    [(9.1, "green"), (8.01, "green"), (8.0, "yellow"), (6.5, "yellow"), (6.0, "red"), (1.0, "red")],
)
def test_virality_band_thresholds(score, band):
    assert render.virality_band(score) == band


def test_colorize_wraps_in_ansi_only_when_enabled():
    assert render.colorize("9.0", "green") == "\033[32m9.0\033[0m"
    assert render.colorize("9.0", "green", enabled=False) == "9.0"


def test_render_clip_card_shows_range_duration_score_and_download():
    card = render.render_clip_card(_clip(), index=2)

    assert card.startswith("#2 Hook")
    assert "01:10 - 01:45" in card
    assert "Duration: 35.0s" in card
    assert "Virality Score: 8.5 [green]" in card
    assert "Why it works." in card
    assert "[ Download Clip ]" in card


def test_render_state_empty():
    assert render.render_state(_controller()) == render.EMPTY_STATE


def test_render_state_loading():
    assert render.render_state(_controller(is_loading=True)) == render.LOADING_INDICATOR


def test_render_state_error_takes_priority():
    text = render.render_state(_controller(error="Please enter a YouTube URL.", clips=[_clip()]))

    assert text == "Error: Please enter a YouTube URL."


def test_render_state_renders_one_card_per_clip():
    clips = [_clip(f"Clip {i}") for i in range(1, 5)]

    text = render.render_state(_controller(clips=clips))

    assert text.startswith("Generated Clips")
    assert text.count("[ Download Clip ]") == 4
    for i in range(1, 5):
        assert f"#{i} Clip {i}" in text


def test_simulate_playback_drives_caption_locator():
    frames = list(render.simulate_playback(_clip(), step=1.0))

    assert len(frames) == 36
    assert frames[0] == (0.0, Caption(0, 2, "first"))
    assert frames[2] == (2.0, Caption(0, 2, "first"))
    assert frames[3] == (3.0, Caption(2, 4, "second"))
    assert frames[5] == (5.0, None)
    assert frames[-1][0] == 35.0


def test_simulate_playback_rejects_non_positive_step():
    with pytest.raises(ValueError):
        list(render.simulate_playback(_clip(), step=0))


def test_render_playback_lists_overlay_lines():
    clip = Clip("t", "00:00", "00:03", "s", 5.0, (Caption(0, 1, "hello"),))

    lines = render.render_playback(clip).splitlines()

    assert lines == ["  [  0.0s] hello", "  [  1.0s] hello", "  [  2.0s]", "  [  3.0s]"]
