from __future__ import annotations

import datetime
import logging

from ..schemas import ReviewDecision, ReviewOutcome

logger = logging.getLogger(__name__)

STATUS_NEW = 'new'
STATUS_LEARNING = 'learning'


class InvalidOutcomeError(ValueError):
    """Raised for a review outcome outside the known vocabulary."""


class SchedulerEngine:
    """
    Proficiency ladder scheduler.
    Pure Logic Layer: No Database, No Flask Context.

    A remembered card climbs one rung and waits ``2 ** (p - 1)`` days, where
    ``p`` is the new proficiency (1, 2, 4, 8 days). Reaching the mastery
    threshold retires the card. A forgotten card drops back to the bottom
    and is due immediately.
    """

    def __init__(self, mastery_threshold: int = 5):
        if mastery_threshold < 1:
            raise ValueError("mastery_threshold must be at least 1")
        self.mastery_threshold = mastery_threshold

    @staticmethod
    def interval_days(proficiency: int) -> int:
        return 2 ** max(0, proficiency - 1)

    def apply_review(self, proficiency: int, outcome: str, now: datetime.datetime) -> ReviewDecision:
        normalized = ReviewOutcome.normalize(outcome)
        if normalized is None:
            raise InvalidOutcomeError(f"Unknown review outcome: {outcome!r}")

        current = max(0, int(proficiency or 0))

        if normalized == ReviewOutcome.FORGOTTEN:
            return ReviewDecision(
                mastered=False,
                proficiency=0,
                status=STATUS_NEW,
                next_review_date=now,
                last_reviewed_at=now,
            )

        new_proficiency = current + 1
        if new_proficiency >= self.mastery_threshold:
            return ReviewDecision(mastered=True, proficiency=new_proficiency)

        return ReviewDecision(
            mastered=False,
            proficiency=new_proficiency,
            status=STATUS_LEARNING,
            next_review_date=now + datetime.timedelta(days=self.interval_days(new_proficiency)),
            last_reviewed_at=now,
        )
