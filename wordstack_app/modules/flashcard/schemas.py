# File: wordstack_app/modules/flashcard/schemas.py
import datetime
from dataclasses import dataclass
from typing import Optional

from marshmallow import Schema, fields, validate


class ReviewOutcome:
    REMEMBERED = 'remembered'
    FORGOTTEN = 'forgotten'

    # Labels sent by the review buttons
    ALIASES = {
        'good': REMEMBERED,
        'again': FORGOTTEN,
    }

    @classmethod
    def normalize(cls, value: Optional[str]) -> Optional[str]:
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        if key in (cls.REMEMBERED, cls.FORGOTTEN):
            return key
        return cls.ALIASES.get(key)


class DueMode:
    RECENT = 'recent'
    NOTEBOOK = 'notebook'
    ALL = (RECENT, NOTEBOOK)


@dataclass
class ReviewDecision:
    """Outcome of applying one review to a card's proficiency."""
    mastered: bool
    proficiency: int
    status: Optional[str] = None
    next_review_date: Optional[datetime.datetime] = None
    last_reviewed_at: Optional[datetime.datetime] = None


@dataclass
class ReviewResult:
    """What the caller gets back from a review."""
    status: str  # 'updated' | 'mastered'
    flashcard_id: int
    flashcard: Optional[dict] = None

    def to_dict(self) -> dict:
        data = {'status': self.status, 'flashcard_id': self.flashcard_id}
        if self.flashcard is not None:
            data['flashcard'] = self.flashcard
        if self.status == 'mastered':
            data['message'] = 'Word mastered, flashcard removed.'
        return data


# --- Requests ---

class CreateFlashcardSchema(Schema):
    word_id = fields.Int(required=True, validate=validate.Range(min=1))
    source = fields.Str(load_default='search', validate=validate.Length(min=1, max=50))
    notebook_id = fields.Int(load_default=None, allow_none=True)


class ReviewFlashcardSchema(Schema):
    flashcard_id = fields.Int(required=True, validate=validate.Range(min=1))
    result = fields.Str(required=True)


class DueFlashcardsQuerySchema(Schema):
    mode = fields.Str(load_default=DueMode.RECENT, validate=validate.OneOf(DueMode.ALL))
    notebook_id = fields.Int(load_default=None, allow_none=True)
    limit = fields.Int(load_default=None, allow_none=True)
