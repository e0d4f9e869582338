"""Static label tables.

Two classification paths speak two vocabularies:

  - SCENE: scene categories from the Places365 image model, mapped to vibes
    (party, calm, happy, romantic, energetic, cozy, melancholy, neutral)
  - TAG: free-text descriptive tags, mapped to emotions
    (happy, calm, energetic, romantic, melancholy, mysterious)

Both are subsets of Mood. RECONCILIATION maps every mood onto the TAG
vocabulary so results from both paths can be compared (e.g. album moods).
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from moodsync.core.models import Mood


@dataclass(frozen=True)
class Vocabulary:
    name: str
    moods: Tuple[Mood, ...]
    default: Mood
    table: Dict[str, Mood]

    @property
    def members(self) -> FrozenSet[Mood]:
        return frozenset(self.moods)


_SCENE_TABLE: Dict[str, Mood] = {
    # Party
    "dance_studio": Mood.party,
    "discotheque": Mood.party,
    "night_club": Mood.party,
    "bar": Mood.party,
    "concert_hall": Mood.party,
    "music_studio": Mood.party,
    # Calm
    "beach": Mood.calm,
    "zen_garden": Mood.calm,
    "forest_path": Mood.calm,
    "mountain": Mood.calm,
    "lake": Mood.calm,
    "ocean": Mood.calm,
    "sky": Mood.calm,
    "library": Mood.calm,
    # Happy
    "amusement_park": Mood.happy,
    "playground": Mood.happy,
    "water_park": Mood.happy,
    "theme_park": Mood.happy,
    "fair": Mood.happy,
    "carnival": Mood.happy,
    # Romantic
    "restaurant": Mood.romantic,
    "vineyard": Mood.romantic,
    "formal_garden": Mood.romantic,
    "gazebo": Mood.romantic,
    # Energetic
    "gym": Mood.energetic,
    "stadium": Mood.energetic,
    "athletic_field": Mood.energetic,
    "basketball_court": Mood.energetic,
    "tennis_court": Mood.energetic,
    # Cozy
    "coffee_shop": Mood.cozy,
    "cafe": Mood.cozy,
    "living_room": Mood.cozy,
    "bedroom": Mood.cozy,
    "fireplace": Mood.cozy,
    # Melancholy
    "cemetery": Mood.melancholy,
    "ruins": Mood.melancholy,
    "abandoned_building": Mood.melancholy,
    "rain": Mood.melancholy,
}

_TAG_TABLE: Dict[str, Mood] = {
    "bright": Mood.happy,
    "colorful": Mood.happy,
    "vibrant": Mood.energetic,
    "sunny": Mood.happy,
    "cheerful": Mood.happy,
    "lively": Mood.energetic,
    "dynamic": Mood.energetic,
    "active": Mood.energetic,
    "festive": Mood.happy,
    "celebration": Mood.happy,
    "peaceful": Mood.calm,
    "serene": Mood.calm,
    "tranquil": Mood.calm,
    "quiet": Mood.calm,
    "soft": Mood.calm,
    "gentle": Mood.calm,
    "relaxing": Mood.calm,
    "nature": Mood.calm,
    "water": Mood.calm,
    "sky": Mood.calm,
    "clouds": Mood.calm,
    "romantic": Mood.romantic,
    "intimate": Mood.romantic,
    "warm": Mood.romantic,
    "cozy": Mood.romantic,
    "sunset": Mood.romantic,
    "flowers": Mood.romantic,
    "couple": Mood.romantic,
    "love": Mood.romantic,
    "dark": Mood.melancholy,
    "moody": Mood.melancholy,
    "rain": Mood.melancholy,
    "grey": Mood.melancholy,
    "sad": Mood.melancholy,
    "lonely": Mood.melancholy,
    "empty": Mood.melancholy,
    "mysterious": Mood.mysterious,
    "shadow": Mood.mysterious,
    "night": Mood.mysterious,
    "fog": Mood.mysterious,
    "silhouette": Mood.mysterious,
    "abstract": Mood.mysterious,
}

SCENE = Vocabulary(
    name="scene",
    moods=(
        Mood.party,
        Mood.calm,
        Mood.happy,
        Mood.romantic,
        Mood.energetic,
        Mood.cozy,
        Mood.melancholy,
        Mood.neutral,
    ),
    default=Mood.neutral,
    table=_SCENE_TABLE,
)

# Order matters: tag votes are tallied in this order.
TAG = Vocabulary(
    name="tag",
    moods=(
        Mood.happy,
        Mood.calm,
        Mood.energetic,
        Mood.romantic,
        Mood.melancholy,
        Mood.mysterious,
    ),
    default=Mood.calm,
    table=_TAG_TABLE,
)

VOCABULARIES: Dict[str, Vocabulary] = {SCENE.name: SCENE, TAG.name: TAG}

# Mood -> closest member of the TAG vocabulary.
RECONCILIATION: Dict[Mood, Mood] = {
    Mood.happy: Mood.happy,
    Mood.calm: Mood.calm,
    Mood.energetic: Mood.energetic,
    Mood.melancholy: Mood.melancholy,
    Mood.romantic: Mood.romantic,
    Mood.mysterious: Mood.mysterious,
    Mood.party: Mood.energetic,
    Mood.cozy: Mood.romantic,
    Mood.neutral: Mood.calm,
}
