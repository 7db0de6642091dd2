# File: wordstack_app/modules/articles/__init__.py
from flask import Blueprint

module_metadata = {
    'name': 'Articles',
    'key': 'articles',
    'description': 'LLM-written practice articles built around chosen words.',
    'url_prefix': '/api/articles',
    'enabled': True,
}

blueprint = Blueprint('articles', __name__)
