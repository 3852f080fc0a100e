"""Mood-driven energy exchange between two cells.

The exchange is asymmetric: the table is indexed by the ordered pair
(this mood, other mood). Healers donate to anyone who is not a healer,
vampires drain anyone who is not a vampire, and a naive cell touched by a
vampire turns into one.
"""

from typing import Dict, NamedTuple, Optional, Tuple

from .rules import Mood, coerce_mood


class InteractionEffect(NamedTuple):
    """Life point deltas and mood changes for one ordered interaction."""
    this_delta: int = 0
    other_delta: int = 0
    this_mood: Optional[Mood] = None
    other_mood: Optional[Mood] = None

    @property
    def is_noop(self) -> bool:
        return self == NO_EFFECT


NO_EFFECT = InteractionEffect()

INTERACTION_TABLE: Dict[Tuple[Mood, Mood], InteractionEffect] = {
    (Mood.NAIVE, Mood.NAIVE): NO_EFFECT,
    (Mood.NAIVE, Mood.HEALER): InteractionEffect(this_delta=1),
    (Mood.NAIVE, Mood.VAMPIRE): InteractionEffect(this_delta=-1, other_delta=1, this_mood=Mood.VAMPIRE),
    (Mood.HEALER, Mood.NAIVE): InteractionEffect(other_delta=1),
    (Mood.HEALER, Mood.HEALER): NO_EFFECT,
    (Mood.HEALER, Mood.VAMPIRE): InteractionEffect(this_delta=-1, other_delta=1),
    (Mood.VAMPIRE, Mood.NAIVE): InteractionEffect(this_delta=1, other_delta=-1, other_mood=Mood.VAMPIRE),
    (Mood.VAMPIRE, Mood.HEALER): InteractionEffect(this_delta=1, other_delta=-1),
    (Mood.VAMPIRE, Mood.VAMPIRE): NO_EFFECT,
}


def effect_for(this_mood: Mood, other_mood: Mood) -> InteractionEffect:
    """Look up the effect of a cell with this_mood interacting with other_mood.

    Raises:
        InvalidMoodOrType: If either mood is not recognized
    """
    return INTERACTION_TABLE[(coerce_mood(this_mood), coerce_mood(other_mood))]
