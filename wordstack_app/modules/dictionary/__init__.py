# File: wordstack_app/modules/dictionary/__init__.py
from flask import Blueprint

module_metadata = {
    'name': 'Dictionary',
    'key': 'dictionary',
    'description': 'Word lookup with LLM completion of missing entries.',
    'url_prefix': '/api/words',
    'enabled': True,
}

blueprint = Blueprint('dictionary', __name__)
