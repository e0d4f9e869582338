from typing import Dict, Union

from moodsync.core import Mood, PipelineResult
from moodsync.music import get_profile


def format_processing_time(milliseconds: float) -> str:
    """
    Human readable duration:
      850     -> "850ms"
      2500    -> "2.5s"
      65000   -> "1m 5s"
    """
    ms = int(round(milliseconds))
    if ms < 1000:
        return f"{ms}ms"
    tenths = int(round(ms / 100))
    if tenths < 600:
        return f"{tenths / 10:.1f}s"
    minutes, seconds = divmod(int(round(ms / 1000)), 60)
    return f"{minutes}m {seconds}s"


def mood_display_info(mood: Union[str, Mood]) -> Dict[str, str]:
    profile = get_profile(mood)
    return {
        "mood": profile.mood.value,
        "color": profile.color,
        "emoji": profile.emoji,
        "playlist_name": profile.playlist_name,
        "reasoning": profile.reasoning,
    }


def build_shareable_summary(result: PipelineResult) -> str:
    """
    Short text summary of a pipeline run, suitable for sharing.
    """
    classification = result.classification
    info = mood_display_info(classification.mood)

    lines = [
        f"{info['emoji']} Detected {info['mood']} vibe "
        f"({round(classification.confidence * 100)}% confidence)",
        f"🎵 Found {len(result.tracks)} matching songs in "
        f"{format_processing_time(result.elapsed_ms)}",
        f"🎧 \"{info['playlist_name']}\" - {info['reasoning']}",
    ]
    if result.tags:
        lines.append(f"🏷️ Tags: {', '.join(result.tags)}")

    if result.tracks:
        lines.append("")
        lines.append("Top tracks:")
        for i, track in enumerate(result.tracks[:3], start=1):
            lines.append(f"{i}. {track.title} by {track.artist}")

    lines.append("")
    lines.append("#MoodSync #AI #Music")
    return "\n".join(lines)
