"""Persisted practice articles generated from notebooks."""

from __future__ import annotations

from ..core.extensions import db
from ..utils.time_utils import utcnow


class GeneratedArticle(db.Model):
    __tablename__ = 'generated_articles'

    article_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    notebook_id = db.Column(db.Integer, db.ForeignKey('notebooks.notebook_id', ondelete='SET NULL'), nullable=True)
    title = db.Column(db.String(200), nullable=False)
    difficulty = db.Column(db.String(20), nullable=False)
    english_content = db.Column(db.Text, nullable=False)
    translated_content = db.Column(db.Text, nullable=False)
    words = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def to_dict(self, include_content: bool = True) -> dict:
        data = {
            'article_id': self.article_id,
            'notebook_id': self.notebook_id,
            'title': self.title,
            'difficulty': self.difficulty,
            'words': list(self.words or []),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
        if include_content:
            data['english'] = self.english_content
            data['translated'] = self.translated_content
        return data
