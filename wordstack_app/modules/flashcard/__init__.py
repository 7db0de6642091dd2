# File: wordstack_app/modules/flashcard/__init__.py
from flask import Blueprint

module_metadata = {
    'name': 'Flashcards',
    'key': 'flashcard',
    'description': 'Proficiency-based spaced repetition of looked-up words.',
    'url_prefix': '/api/flashcards',
    'enabled': True,
}

blueprint = Blueprint('flashcard', __name__)
