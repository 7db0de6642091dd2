"""
Tests for the flashcard scheduler - pure proficiency ladder logic.

Tests cover:
- Interval growth per proficiency
- Remembered / forgotten transitions
- Mastery threshold
- Outcome normalization
"""

import datetime

import pytest

from wordstack_app.modules.flashcard.engine.scheduler import InvalidOutcomeError, SchedulerEngine
from wordstack_app.modules.flashcard.schemas import ReviewOutcome

NOW = datetime.datetime(2024, 3, 1, 9, 30)


class TestIntervalDays:

    @pytest.mark.parametrize('proficiency,days', [(0, 1), (1, 1), (2, 2), (3, 4), (4, 8)])
    def test_doubles_per_level(self, proficiency, days):
        assert SchedulerEngine.interval_days(proficiency) == days


class TestApplyReview:
    """Test state transitions for a single review."""

    def setup_method(self):
        self.engine = SchedulerEngine(mastery_threshold=5)

    def test_new_card_remembered_moves_to_learning(self):
        decision = self.engine.apply_review(0, 'remembered', NOW)

        assert decision.mastered is False
        assert decision.proficiency == 1
        assert decision.status == 'learning'
        assert decision.next_review_date == NOW + datetime.timedelta(days=1)
        assert decision.last_reviewed_at == NOW

    def test_remembered_at_three_waits_eight_days(self):
        decision = self.engine.apply_review(3, 'remembered', NOW)

        assert decision.proficiency == 4
        assert decision.next_review_date == NOW + datetime.timedelta(days=8)

    def test_forgotten_resets_and_is_due_now(self):
        decision = self.engine.apply_review(4, 'forgotten', NOW)

        assert decision.mastered is False
        assert decision.proficiency == 0
        assert decision.status == 'new'
        assert decision.next_review_date == NOW

    def test_reaching_threshold_masters(self):
        decision = self.engine.apply_review(4, 'remembered', NOW)

        assert decision.mastered is True
        assert decision.proficiency == 5
        assert decision.next_review_date is None

    def test_custom_threshold(self):
        engine = SchedulerEngine(mastery_threshold=2)
        assert engine.apply_review(0, 'remembered', NOW).mastered is False
        assert engine.apply_review(1, 'remembered', NOW).mastered is True

    def test_negative_or_missing_proficiency_treated_as_zero(self):
        assert self.engine.apply_review(-3, 'remembered', NOW).proficiency == 1
        assert self.engine.apply_review(None, 'remembered', NOW).proficiency == 1

    def test_button_aliases_accepted(self):
        assert self.engine.apply_review(1, 'Good', NOW).proficiency == 2
        assert self.engine.apply_review(1, 'again', NOW).proficiency == 0

    @pytest.mark.parametrize('outcome', ['', 'maybe', None, 3])
    def test_unknown_outcome_rejected(self, outcome):
        with pytest.raises(InvalidOutcomeError):
            self.engine.apply_review(1, outcome, NOW)

    def test_threshold_must_be_positive(self):
        with pytest.raises(ValueError):
            SchedulerEngine(mastery_threshold=0)


class TestReviewOutcome:

    def test_normalize(self):
        assert ReviewOutcome.normalize(' REMEMBERED ') == 'remembered'
        assert ReviewOutcome.normalize('forgotten') == 'forgotten'
        assert ReviewOutcome.normalize('good') == 'remembered'
        assert ReviewOutcome.normalize('nope') is None
