import argparse
import asyncio
import json
import logging
import sys

from viralclip.client import request_clips
from viralclip.config import DEFAULT_PROVIDER, MODEL_DEFAULTS, check_credentials, load_config
from viralclip.controller import ClipController
from viralclip.exceptions import ConfigurationError
from viralclip.log_setup import setup_logging
from viralclip.render import render_clip_card, render_header, render_playback, render_state

logger = logging.getLogger(__name__)


def _exit_with_error(message: str, code: int = 1) -> None:
    print(message)
    raise SystemExit(code)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ViralClip - AI-suggested short-form clips for a YouTube video"
    )

    ai_group = parser.add_mutually_exclusive_group()
    ai_group.add_argument("-g", "--gemini", action="store_true", help="Use Google Gemini (default)")
    ai_group.add_argument("-o", "--openai", action="store_true", help="Use OpenAI")
    ai_group.add_argument("-l", "--ollama", action="store_true", help="Use Ollama (local)")

    parser.add_argument("url", help="YouTube video URL")
    parser.add_argument("--model", default=None, help="Override AI model name")
    parser.add_argument("--config", default=None, help="Path to config TOML file")
    parser.add_argument("--json", action="store_true", help="Print clips as JSON instead of cards")
    parser.add_argument("--play", action="store_true", help="Simulate playback with caption overlay")
    parser.add_argument("--step", type=float, default=1.0, help="Playback step in seconds")
    parser.add_argument("--color", action="store_true", help="Colour the virality score")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostics level (written to stderr)",
    )
    return parser


def _resolve_provider(args: argparse.Namespace, configured: str | None) -> str:
    # CLI flag > config > default
    if args.gemini:
        return "gemini"
    if args.openai:
        return "openai"
    if args.ollama:
        return "ollama"
    return configured or DEFAULT_PROVIDER


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.step <= 0:
        parser.error("--step must be positive")

    setup_logging(getattr(logging, args.log_level))

    try:
        cfg = load_config(args.config)
    except ConfigurationError as exc:
        _exit_with_error(str(exc))

    provider = _resolve_provider(args, cfg.provider)
    credential_error = check_credentials(provider)
    if credential_error is not None:
        _exit_with_error(f"Configuration error: {credential_error}")

    # Resolve model: --model flag > config > default for provider
    model = args.model or cfg.model or MODEL_DEFAULTS.get(provider)

    controller = ClipController(lambda url: request_clips(url, provider=provider, model=model))

    if not args.json:
        print(render_header())
        print(f"Analyzing {args.url or '(no URL)'} with {provider} ({model})...")

    asyncio.run(controller.submit(args.url))

    if controller.error:
        if controller.last_failure is not None:
            logger.debug("Failure detail: %r", controller.last_failure)
        _exit_with_error(render_state(controller))

    if args.json:
        json.dump([clip.to_dict() for clip in controller.clips], sys.stdout, ensure_ascii=False, indent=2)
        print()
        return

    if not args.play:
        print(render_state(controller, color=args.color))
        return

    print("Generated Clips")
    for index, clip in enumerate(controller.clips, start=1):
        print()
        print(render_clip_card(clip, index, color=args.color))
        print(render_playback(clip, args.step))


if __name__ == "__main__":
    main()
