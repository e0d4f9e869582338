"""Per-mood music profiles.

Each Mood has one MoodProfile holding everything the matcher needs: the
free-text search query, seed genres, the target audio-feature vector used for
re-ranking, and display strings. The table is checked for completeness at
import time; lookups of unknown moods fall back to the neutral profile.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

from moodsync.core import ConfigurationError, FeatureVector, Mood


@dataclass(frozen=True)
class MoodProfile:
    mood: Mood
    query: str
    reasoning: str
    playlist_name: str
    genres: Tuple[str, ...]
    target: FeatureVector = field(default_factory=dict)
    color: str = "#808080"
    emoji: str = "😐"


MOOD_PROFILES: Dict[Mood, MoodProfile] = {
    Mood.party: MoodProfile(
        mood=Mood.party,
        query="genre:electronic,dance,pop energy:high mood:party",
        reasoning="High-energy dance music perfect for parties",
        playlist_name="Party Time 🎉",
        genres=("electronic", "dance", "pop", "house"),
        target={"valence": 0.8, "energy": 0.9, "danceability": 0.8},
        color="#FF00FF",
        emoji="🎉",
    ),
    Mood.calm: MoodProfile(
        mood=Mood.calm,
        query="genre:ambient,classical,instrumental,lofi mood:calm energy:low",
        reasoning="Peaceful and relaxing music for calm moments",
        playlist_name="Peaceful Moments 🧘",
        genres=("ambient", "classical", "jazz", "acoustic"),
        target={"valence": 0.5, "energy": 0.2, "acousticness": 0.7},
        color="#4169E1",
        emoji="🧘",
    ),
    Mood.happy: MoodProfile(
        mood=Mood.happy,
        query="genre:pop,indie,folk mood:happy energy:medium",
        reasoning="Feel-good music with positive vibes",
        playlist_name="Happy Vibes ☀️",
        genres=("pop", "dance", "funk", "disco"),
        target={"valence": 0.7, "energy": 0.6, "danceability": 0.6},
        color="#FFD700",
        emoji="😊",
    ),
    Mood.romantic: MoodProfile(
        mood=Mood.romantic,
        query="genre:r&b,soul,jazz mood:romantic energy:medium",
        reasoning="Romantic and soulful music for intimate moments",
        playlist_name="Romantic Mood 💖",
        genres=("r&b", "soul", "indie", "folk"),
        target={"valence": 0.7, "energy": 0.5, "acousticness": 0.4},
        color="#FF69B4",
        emoji="💖",
    ),
    Mood.energetic: MoodProfile(
        mood=Mood.energetic,
        query="genre:electronic,rock,pop energy:high tempo:>120",
        reasoning="High-tempo music to boost energy and motivation",
        playlist_name="Energy Boost ⚡",
        genres=("rock", "electronic", "hip-hop", "punk"),
        target={"valence": 0.6, "energy": 0.9, "danceability": 0.7},
        color="#FF4500",
        emoji="⚡",
    ),
    Mood.cozy: MoodProfile(
        mood=Mood.cozy,
        query="genre:folk,acoustic,indie mood:chill energy:low acousticness:>0.5",
        reasoning="Warm acoustic music perfect for cozy environments",
        playlist_name="Cozy Corner 🏡",
        genres=("folk", "acoustic", "indie", "jazz"),
        target={"valence": 0.6, "energy": 0.3, "acousticness": 0.8},
        color="#8B4513",
        emoji="🏡",
    ),
    Mood.melancholy: MoodProfile(
        mood=Mood.melancholy,
        query="genre:indie,alternative,acoustic mood:sad energy:low",
        reasoning="Introspective and emotional music for reflective moments",
        playlist_name="Reflective Moments 🌧️",
        genres=("indie", "alternative", "blues", "folk"),
        target={"valence": 0.3, "energy": 0.3, "acousticness": 0.5},
        color="#708090",
        emoji="🌧️",
    ),
    Mood.mysterious: MoodProfile(
        mood=Mood.mysterious,
        query="genre:ambient,electronic,experimental mood:dark energy:low",
        reasoning="Atmospheric and enigmatic music for mysterious scenes",
        playlist_name="Night Whispers 🌙",
        genres=("ambient", "electronic", "dark", "experimental"),
        target={"valence": 0.3, "energy": 0.4, "instrumentalness": 0.6},
        color="#4B0082",
        emoji="🌙",
    ),
    Mood.neutral: MoodProfile(
        mood=Mood.neutral,
        query="genre:indie,alternative,chill energy:medium",
        reasoning="Balanced and versatile music for any mood",
        playlist_name="Balanced Beats ⚖️",
        genres=("indie", "alternative", "chill", "pop"),
        target={"valence": 0.5, "energy": 0.5, "danceability": 0.5},
    ),
}


def _check_profiles() -> None:
    missing: List[str] = [
        f"MOOD_PROFILES[{mood.value}]"
        for mood in Mood
        if mood not in MOOD_PROFILES
        or not MOOD_PROFILES[mood].query.strip()
        or not MOOD_PROFILES[mood].target
    ]
    if missing:
        raise ConfigurationError(missing)


_check_profiles()


def get_profile(mood: Union[str, Mood]) -> MoodProfile:
    """
    Profile for a mood or mood name; anything unknown gets the neutral one.
    """
    parsed = Mood.parse(mood)
    if parsed is None:
        return MOOD_PROFILES[Mood.neutral]
    return MOOD_PROFILES.get(parsed, MOOD_PROFILES[Mood.neutral])


def build_search_query(mood: Union[str, Mood]) -> str:
    return get_profile(mood).query


def build_tag_query(mood: Union[str, Mood], tags: Tuple[str, ...] = ()) -> str:
    """
    Free-text query mixing photo tags with the mood's genres.

    Kept short: at most three tags and two genres.
    """
    profile = get_profile(mood)
    terms = [t.strip() for t in tags if t and t.strip()][:3]
    terms.extend(profile.genres[:2])
    return " ".join(terms)
