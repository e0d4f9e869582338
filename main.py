import argparse
import sys
from pathlib import Path
from typing import List, Optional

from moodsync.config import LOG_LEVEL
from moodsync.core import (
    ConfigurationError,
    MatchError,
    Mood,
    PipelineError,
    configure_logging,
    log_error,
    log_section,
    log_step,
    log_success,
)
from moodsync.pipeline import (
    DEFAULT_MUSIC_LIMIT,
    build_orchestrator,
    build_shareable_summary,
    mood_display_info,
)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Detect the vibe of a photo and suggest matching songs."
    )
    parser.add_argument("image", nargs="?", help="Path to the photo to analyze.")
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_MUSIC_LIMIT,
        help="Number of tracks to return (1-50).",
    )
    parser.add_argument(
        "--mood",
        choices=[m.value for m in Mood],
        help="Skip photo analysis and pick music for this mood.",
    )
    parser.add_argument(
        "--tags",
        action="store_true",
        help="Describe the photo with tags (needs GEMINI_API_KEY) instead of scene classification.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging(LOG_LEVEL)
    args = _parse_args(argv)

    if not args.image and not args.mood:
        log_error("Give an image path or --mood.")
        return 2

    try:
        orchestrator = build_orchestrator()
    except ConfigurationError as e:
        log_error(f"{e}. Set them in the environment or the .env file.")
        return 2

    if args.mood:
        log_section(f"Music for {args.mood}")
        try:
            tracks = orchestrator.music_for_mood(args.mood, args.limit)
        except MatchError as e:
            log_error(str(e))
            return 1
        info = mood_display_info(args.mood)
        print(f"{info['emoji']} {info['playlist_name']} - {info['reasoning']}")
        for i, track in enumerate(tracks, start=1):
            print(f"{i}. {track.title} by {track.artist}  {track.external_url}")
        return 0

    path = Path(args.image)
    if not path.is_file():
        log_error(f"No such file: {path}")
        return 2

    log_section("MoodSync")
    log_step(f"Reading {path}...")
    image_bytes = path.read_bytes()

    try:
        if args.tags:
            result = orchestrator.run_tagged(image_bytes, args.limit)
        else:
            result = orchestrator.run(image_bytes, args.limit)
    except ConfigurationError as e:
        log_error(f"{e}. Set them in the environment or the .env file.")
        return 2
    except PipelineError as e:
        log_error(f"{e.stage.value} failed: {e.message}")
        return 1

    print(build_shareable_summary(result))
    log_success("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
