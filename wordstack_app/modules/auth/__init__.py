# File: wordstack_app/modules/auth/__init__.py
from flask import Blueprint

module_metadata = {
    'name': 'Authentication',
    'key': 'auth',
    'description': 'Session login for the JSON API.',
    'url_prefix': '/api/auth',
    'enabled': True,
}

blueprint = Blueprint('auth', __name__)
