# File: wordstack_app/modules/flashcard/services/flashcard_service.py
# Persistence side of the flashcard scheduler.

import datetime
import logging
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload, selectinload

from ....core.error_handlers import ForbiddenError, InvalidArgumentError, NotFoundError
from ....core.extensions import db
from ....core.signals import card_mastered, card_reviewed
from ....models import Flashcard, Notebook, Sense, Word
from ....utils.db_session import safe_commit
from ....utils.time_utils import as_naive_utc, isoformat_or_none, utcnow
from ..engine.scheduler import InvalidOutcomeError, SchedulerEngine
from ..schemas import DueMode, ReviewOutcome, ReviewResult

logger = logging.getLogger(__name__)


def serialize_flashcard(card: Flashcard, include_senses: bool = False) -> Dict[str, Any]:
    word = card.word
    data = {
        'id': card.flashcard_id,
        'word_id': card.word_id,
        'spelling': word.spelling if word else None,
        'phonetic_uk': word.phonetic_uk if word else None,
        'phonetic_us': word.phonetic_us if word else None,
        'status': card.status,
        'proficiency': card.proficiency,
        'source': card.source,
        'notebook_id': card.notebook_id,
        'next_review_date': isoformat_or_none(card.next_review_date),
        'last_reviewed_at': isoformat_or_none(card.last_reviewed_at),
        'created_at': isoformat_or_none(card.created_at),
    }
    if include_senses and word is not None:
        data['senses'] = [
            {
                'part_of_speech': sense.part_of_speech,
                'definition_en': sense.definition_en,
                'definition_localized': sense.definition_localized,
                'examples': [
                    {'sentence_en': ex.sentence_en, 'sentence_translated': ex.sentence_translated}
                    for ex in sense.examples
                ],
            }
            for sense in word.senses
        ]
    return data


class FlashcardService:
    """
    Orchestrator for flashcard scheduling.
    Handles DB interactions, engine calls and signal emission.
    """

    @staticmethod
    def _engine() -> SchedulerEngine:
        return SchedulerEngine(current_app.config.get('FLASHCARD_MASTERY_THRESHOLD', 5))

    @staticmethod
    def _get_owned(user_id: int, flashcard_id: int) -> Flashcard:
        card = db.session.get(Flashcard, flashcard_id)
        if card is None:
            raise NotFoundError('Flashcard not found.', resource='flashcard')
        if card.user_id != user_id:
            raise ForbiddenError('You cannot access this flashcard.')
        return card

    @staticmethod
    def create_flashcard(
        user_id: int,
        word_id: int,
        source: str = 'search',
        notebook_id: Optional[int] = None,
    ) -> Flashcard:
        """Create the user's card for ``word_id``, or return the one that exists."""
        if db.session.get(Word, word_id) is None:
            raise NotFoundError('Word not found.', resource='word')

        if notebook_id is not None:
            notebook = db.session.get(Notebook, notebook_id)
            if notebook is None:
                raise NotFoundError('Notebook not found.', resource='notebook')
            if notebook.user_id != user_id:
                raise ForbiddenError('You cannot access this notebook.')

        existing = Flashcard.query.filter_by(user_id=user_id, word_id=word_id).first()
        if existing is not None:
            return existing

        now = utcnow()
        card = Flashcard(
            user_id=user_id,
            word_id=word_id,
            source=source or 'search',
            notebook_id=notebook_id,
            status=Flashcard.STATUS_NEW,
            proficiency=0,
            next_review_date=now,
            created_at=now,
        )
        try:
            with db.session.begin_nested():
                db.session.add(card)
        except IntegrityError:
            logger.info(f"Flashcard for user {user_id} / word {word_id} created concurrently, reusing it")
            return Flashcard.query.filter_by(user_id=user_id, word_id=word_id).one()

        safe_commit(db.session)
        logger.info(f"Created flashcard {card.flashcard_id} for user {user_id}, word {word_id}")
        return card

    @classmethod
    def review_flashcard(
        cls,
        user_id: int,
        flashcard_id: int,
        result: str,
        now: Optional[datetime.datetime] = None,
    ) -> ReviewResult:
        """
        Apply one review. A card that reaches the mastery threshold is
        deleted and reported as ``mastered``.

        Raises:
            NotFoundError: no such card.
            ForbiddenError: the card belongs to another user.
            InvalidArgumentError: ``result`` is not a known outcome.
            StorageBusyError: the database stayed locked; nothing was stored.
        """
        card = cls._get_owned(user_id, flashcard_id)
        now = as_naive_utc(now) or utcnow()

        try:
            decision = cls._engine().apply_review(card.proficiency, result, now)
        except InvalidOutcomeError as e:
            raise InvalidArgumentError(str(e)) from e

        if decision.mastered:
            word_id = card.word_id
            db.session.delete(card)
            safe_commit(db.session)
            logger.info(f"Flashcard {flashcard_id} mastered by user {user_id}, removed")
            card_reviewed.send(
                None, user_id=user_id, flashcard_id=flashcard_id, outcome=ReviewOutcome.REMEMBERED,
                proficiency=decision.proficiency,
            )
            card_mastered.send(None, user_id=user_id, flashcard_id=flashcard_id, word_id=word_id)
            return ReviewResult(status='mastered', flashcard_id=flashcard_id)

        card.proficiency = decision.proficiency
        card.status = decision.status
        card.next_review_date = decision.next_review_date
        card.last_reviewed_at = decision.last_reviewed_at
        safe_commit(db.session)

        card_reviewed.send(
            None, user_id=user_id, flashcard_id=flashcard_id,
            outcome=ReviewOutcome.normalize(result),
            proficiency=decision.proficiency,
        )
        return ReviewResult(status='updated', flashcard_id=flashcard_id, flashcard=serialize_flashcard(card))

    @staticmethod
    def list_due_flashcards(
        user_id: int,
        mode: str = DueMode.RECENT,
        notebook_id: Optional[int] = None,
        limit: Optional[int] = None,
        now: Optional[datetime.datetime] = None,
    ) -> List[Dict[str, Any]]:
        """Cards due at ``now``, longest overdue first, weakest first on ties."""
        config = current_app.config
        if limit is None:
            limit = config.get('FLASHCARD_DUE_DEFAULT_LIMIT', 20)
        max_limit = config.get('FLASHCARD_DUE_MAX_LIMIT', 100)
        if not 1 <= limit <= max_limit:
            raise InvalidArgumentError(f"limit must be between 1 and {max_limit}.")
        if mode not in DueMode.ALL:
            raise InvalidArgumentError(f"Unknown review mode: {mode!r}")
        if mode == DueMode.NOTEBOOK and notebook_id is None:
            raise InvalidArgumentError('notebook_id is required in notebook mode.')

        now = as_naive_utc(now) or utcnow()
        query = (
            Flashcard.query.options(
                joinedload(Flashcard.word).selectinload(Word.senses).selectinload(Sense.examples)
            )
            .filter(Flashcard.user_id == user_id, Flashcard.next_review_date <= now)
        )
        if mode == DueMode.NOTEBOOK:
            query = query.filter(Flashcard.notebook_id == notebook_id)

        cards = (
            query.order_by(Flashcard.next_review_date.asc(), Flashcard.proficiency.asc(), Flashcard.flashcard_id.asc())
            .limit(limit)
            .all()
        )
        return [serialize_flashcard(card, include_senses=True) for card in cards]

    @staticmethod
    def list_flashcards(user_id: int) -> List[Dict[str, Any]]:
        cards = (
            Flashcard.query.filter_by(user_id=user_id)
            .order_by(Flashcard.created_at.desc(), Flashcard.flashcard_id.desc())
            .all()
        )
        return [serialize_flashcard(card) for card in cards]

    @classmethod
    def get_flashcard(cls, user_id: int, flashcard_id: int) -> Dict[str, Any]:
        return serialize_flashcard(cls._get_owned(user_id, flashcard_id), include_senses=True)

    @classmethod
    def delete_flashcard(cls, user_id: int, flashcard_id: int) -> None:
        card = cls._get_owned(user_id, flashcard_id)
        db.session.delete(card)
        safe_commit(db.session)
        logger.info(f"Deleted flashcard {flashcard_id} of user {user_id}")
