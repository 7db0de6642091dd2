# File: wordstack_app/modules/notebook/services/notebook_service.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from ....core.error_handlers import ConflictError, ForbiddenError, InvalidArgumentError, NotFoundError
from ....core.extensions import db
from ....models import Notebook, NotebookWord, Word
from ....utils.db_session import safe_commit
from ....utils.time_utils import isoformat_or_none

logger = logging.getLogger(__name__)

DEFAULT_NOTEBOOK_NAME = 'My Words'
DEFAULT_NOTEBOOK_DESCRIPTION = 'Created automatically for words you save.'


def _notebook_to_dict(notebook: Notebook, word_count: Optional[int] = None) -> Dict[str, Any]:
    data = {
        'id': notebook.notebook_id,
        'name': notebook.name,
        'description': notebook.description,
        'is_default': notebook.is_default,
        'created_at': isoformat_or_none(notebook.created_at),
    }
    if word_count is not None:
        data['word_count'] = word_count
    return data


class NotebookService:

    @staticmethod
    def get_owned_notebook(user_id: int, notebook_id: int) -> Notebook:
        notebook = db.session.get(Notebook, notebook_id)
        if notebook is None:
            raise NotFoundError('Notebook not found.', resource='notebook')
        if notebook.user_id != user_id:
            raise ForbiddenError('You cannot access this notebook.')
        return notebook

    @staticmethod
    def list_notebooks(user_id: int) -> List[Dict[str, Any]]:
        """Default notebook first, then newest first, with word counts."""
        counts = (
            db.session.query(NotebookWord.notebook_id, func.count(NotebookWord.id))
            .join(Notebook)
            .filter(Notebook.user_id == user_id)
            .group_by(NotebookWord.notebook_id)
            .all()
        )
        count_map = dict(counts)
        notebooks = (
            Notebook.query.filter_by(user_id=user_id)
            .order_by(Notebook.is_default.desc(), Notebook.created_at.desc(), Notebook.notebook_id.desc())
            .all()
        )
        return [_notebook_to_dict(nb, count_map.get(nb.notebook_id, 0)) for nb in notebooks]

    @staticmethod
    def create_notebook(user_id: int, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        name = (name or '').strip()
        if not name:
            raise InvalidArgumentError('Notebook name must not be empty.')
        notebook = Notebook(user_id=user_id, name=name, description=description)
        db.session.add(notebook)
        safe_commit(db.session)
        logger.info(f"User {user_id} created notebook {notebook.notebook_id}")
        return _notebook_to_dict(notebook, 0)

    @staticmethod
    def get_default_notebook(user_id: int) -> Dict[str, Any]:
        notebook = Notebook.query.filter_by(user_id=user_id, is_default=True).first()
        if notebook is None:
            notebook = Notebook(
                user_id=user_id,
                name=DEFAULT_NOTEBOOK_NAME,
                description=DEFAULT_NOTEBOOK_DESCRIPTION,
                is_default=True,
            )
            db.session.add(notebook)
            safe_commit(db.session)
            logger.info(f"Created default notebook {notebook.notebook_id} for user {user_id}")
        return _notebook_to_dict(notebook)

    @classmethod
    def get_notebook_detail(cls, user_id: int, notebook_id: int) -> Dict[str, Any]:
        notebook = cls.get_owned_notebook(user_id, notebook_id)
        data = _notebook_to_dict(notebook)
        data['words'] = [
            {
                'word_id': entry.word.word_id,
                'spelling': entry.word.spelling,
                'phonetic_uk': entry.word.phonetic_uk,
                'phonetic_us': entry.word.phonetic_us,
                'added_at': isoformat_or_none(entry.added_at),
            }
            for entry in notebook.entries
        ]
        return data

    @classmethod
    def get_notebook_spellings(cls, user_id: int, notebook_id: int) -> List[str]:
        notebook = cls.get_owned_notebook(user_id, notebook_id)
        return [entry.word.spelling for entry in notebook.entries]

    @classmethod
    def add_word(cls, user_id: int, notebook_id: int, word_id: int) -> Dict[str, Any]:
        notebook = cls.get_owned_notebook(user_id, notebook_id)
        if db.session.get(Word, word_id) is None:
            raise NotFoundError('Word not found.', resource='word')

        entry = NotebookWord(notebook_id=notebook.notebook_id, word_id=word_id)
        try:
            with db.session.begin_nested():
                db.session.add(entry)
        except IntegrityError as e:
            raise ConflictError('The word is already in this notebook.') from e

        safe_commit(db.session)
        return {
            'id': entry.id,
            'notebook_id': entry.notebook_id,
            'word_id': entry.word_id,
            'added_at': isoformat_or_none(entry.added_at),
        }

    @classmethod
    def remove_word(cls, user_id: int, notebook_id: int, word_id: int) -> None:
        notebook = cls.get_owned_notebook(user_id, notebook_id)
        entry = NotebookWord.query.filter_by(notebook_id=notebook.notebook_id, word_id=word_id).first()
        if entry is None:
            raise NotFoundError('The word is not in this notebook.', resource='notebook_word')
        db.session.delete(entry)
        safe_commit(db.session)
