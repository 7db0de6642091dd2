from dataclasses import dataclass, field

from marshmallow import Schema, fields, validate

from .logics.prompts import DIFFICULTIES


@dataclass(frozen=True)
class ArticleResult:
    """A generated article as served to the caller and kept in the cache."""
    english: str
    translated: str
    difficulty: str
    words: tuple
    missing_words: tuple = field(default_factory=tuple)
    has_translation: bool = True

    def to_dict(self) -> dict:
        return {
            'english': self.english,
            'translated': self.translated,
            'difficulty': self.difficulty,
            'words': list(self.words),
            'missing_words': list(self.missing_words),
            'has_translation': self.has_translation,
        }


class GenerateFromWordsSchema(Schema):
    words = fields.List(fields.Str(), required=True, validate=validate.Length(min=1))
    level = fields.Str(required=True, validate=validate.OneOf(DIFFICULTIES))


class GenerateForNotebookSchema(Schema):
    notebook_id = fields.Int(required=True, validate=validate.Range(min=1))
    level = fields.Str(load_default='highschool', validate=validate.OneOf(DIFFICULTIES))
