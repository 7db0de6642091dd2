"""Per-user spaced-repetition card for a word."""

from __future__ import annotations

from ..core.extensions import db
from ..utils.time_utils import utcnow


class Flashcard(db.Model):
    __tablename__ = 'flashcards'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'word_id', name='uq_flashcard_user_word'),
        db.Index('ix_flashcards_user_due', 'user_id', 'next_review_date'),
    )

    STATUS_NEW = 'new'
    STATUS_LEARNING = 'learning'

    flashcard_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    word_id = db.Column(db.Integer, db.ForeignKey('words.word_id', ondelete='CASCADE'), nullable=False)
    notebook_id = db.Column(db.Integer, db.ForeignKey('notebooks.notebook_id', ondelete='SET NULL'), nullable=True)
    source = db.Column(db.String(50), nullable=False, default='search')
    status = db.Column(db.String(20), nullable=False, default=STATUS_NEW)
    proficiency = db.Column(db.Integer, nullable=False, default=0)
    next_review_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    last_reviewed_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    word = db.relationship('Word', lazy='joined')

    def __repr__(self):
        return f'<Flashcard {self.flashcard_id} user={self.user_id} word={self.word_id} p={self.proficiency}>'
