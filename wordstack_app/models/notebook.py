"""User notebooks (named word collections)."""

from __future__ import annotations

from ..core.extensions import db
from ..utils.time_utils import utcnow


class Notebook(db.Model):
    __tablename__ = 'notebooks'

    notebook_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    is_default = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    entries = db.relationship(
        'NotebookWord',
        backref='notebook',
        lazy=True,
        order_by='NotebookWord.added_at.desc()',
        cascade='all, delete-orphan',
    )


class NotebookWord(db.Model):
    __tablename__ = 'notebook_words'
    __table_args__ = (
        db.UniqueConstraint('notebook_id', 'word_id', name='uq_notebook_word'),
    )

    id = db.Column(db.Integer, primary_key=True)
    notebook_id = db.Column(db.Integer, db.ForeignKey('notebooks.notebook_id', ondelete='CASCADE'), nullable=False, index=True)
    word_id = db.Column(db.Integer, db.ForeignKey('words.word_id', ondelete='CASCADE'), nullable=False)
    added_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    word = db.relationship('Word', lazy='joined')
