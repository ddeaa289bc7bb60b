from typing import Callable, List, Optional, Sequence

from loguru import logger

from league_fairness.models.fairness import FallbackEvent
from league_fairness.scoring.policy import NO_PREFERENCE_SCORE

FallbackSink = Callable[[FallbackEvent], None]


def log_fallback_event(event: FallbackEvent) -> None:
    """Default sink: reports the fallback through the application log."""
    logger.bind(team_id=event.team_id).warning(
        f"Team {event.team_id} scored 0 on all {event.slot_count} slots; "
        f"treating it as having no preferences ({event.replacement_score} per slot)."
    )


def apply_adaptive_fallback(
    team_id: int,
    scores: Sequence[float],
    sink: Optional[FallbackSink] = None,
) -> List[float]:
    """Replaces an all-zero score series with maximum scores.

    A team whose preferences no available slot can satisfy would otherwise be
    penalized on every slot. The series is returned unchanged when any score is
    non-zero or when it is empty.
    """
    if not scores or any(score != 0 for score in scores):
        return list(scores)

    event = FallbackEvent(
        team_id=team_id,
        slot_count=len(scores),
        replacement_score=NO_PREFERENCE_SCORE,
    )
    (sink or log_fallback_event)(event)
    return [NO_PREFERENCE_SCORE] * len(scores)
