"""Dictionary entries: words, their ordered senses and example sentences."""

from __future__ import annotations

from ..core.extensions import db
from ..utils.time_utils import utcnow


class Word(db.Model):
    """A headword. ``spelling`` is stored lowercased and is unique."""

    __tablename__ = 'words'

    word_id = db.Column(db.Integer, primary_key=True)
    spelling = db.Column(db.String(100), unique=True, nullable=False, index=True)
    phonetic_uk = db.Column(db.String(100))
    phonetic_us = db.Column(db.String(100))
    audio_uk_url = db.Column(db.String(500))
    audio_us_url = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    senses = db.relationship(
        'Sense',
        backref='word',
        lazy=True,
        order_by='Sense.sense_order',
        cascade='all, delete-orphan',
    )

    def is_complete(self) -> bool:
        """True when every sense has a localized definition and an example."""
        if not self.senses:
            return False
        for sense in self.senses:
            if not (sense.definition_localized or '').strip():
                return False
            if not sense.examples:
                return False
        return True

    def __repr__(self):
        return f'<Word {self.spelling}>'


class Sense(db.Model):
    __tablename__ = 'word_senses'
    __table_args__ = (
        db.UniqueConstraint('word_id', 'sense_order', name='uq_word_sense_order'),
    )

    sense_id = db.Column(db.Integer, primary_key=True)
    word_id = db.Column(db.Integer, db.ForeignKey('words.word_id', ondelete='CASCADE'), nullable=False, index=True)
    sense_order = db.Column(db.Integer, nullable=False)
    part_of_speech = db.Column(db.String(50), nullable=False)
    definition_en = db.Column(db.Text, nullable=False)
    definition_localized = db.Column(db.Text)

    examples = db.relationship(
        'Example',
        backref='sense',
        lazy=True,
        order_by='Example.example_id',
        cascade='all, delete-orphan',
    )


class Example(db.Model):
    __tablename__ = 'word_examples'

    example_id = db.Column(db.Integer, primary_key=True)
    sense_id = db.Column(db.Integer, db.ForeignKey('word_senses.sense_id', ondelete='CASCADE'), nullable=False, index=True)
    sentence_en = db.Column(db.Text, nullable=False)
    sentence_translated = db.Column(db.Text)
