"""Fixed affirmation texts, indexed by schedule slot.

Even slots are morning prompts and odd slots evening prompts; slot
``2 * cycle_day`` and ``2 * cycle_day + 1`` belong to the same study day.
"""

from __future__ import annotations

from care_kit.services.study_calendar import AFFIRMATION_SLOTS

AFFIRMATIONS: tuple[str, ...] = (
    # Day 1
    "I am allowed to take this day one step at a time.",
    "I did what I could today, and that is enough.",
    # Day 2
    "I can meet today's challenges with patience and care.",
    "I release what I cannot control and rest in what I can.",
    # Day 3
    "My breath is steady, and I can return to it whenever I need.",
    "I am proud of the small things I handled today.",
    # Day 4
    "I deserve the same kindness I offer to others.",
    "It is safe for me to slow down and let the day settle.",
    # Day 5
    "I have handled hard days before, and I can handle this one.",
    "Tonight I give myself permission to rest without guilt.",
    # Day 6
    "I choose to focus on what matters most to me today.",
    "I learned something about myself today, and I am growing.",
    # Day 7
    "I begin this day with calm and confidence.",
    "I am grateful for my effort and ready for a peaceful night.",
)

if len(AFFIRMATIONS) != AFFIRMATION_SLOTS:  # pragma: no cover - import-time guard
    raise RuntimeError(f"Expected {AFFIRMATION_SLOTS} affirmations, found {len(AFFIRMATIONS)}")


def affirmation_for(index: int) -> str:
    """Return the affirmation text for a slot in [0, 13].

    Raises:
        IndexError: if ``index`` is outside the schedule.
    """
    if not 0 <= index < AFFIRMATION_SLOTS:
        raise IndexError(f"Affirmation index {index} out of range")
    return AFFIRMATIONS[index]
