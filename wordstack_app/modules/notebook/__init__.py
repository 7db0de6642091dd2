# File: wordstack_app/modules/notebook/__init__.py
from flask import Blueprint

module_metadata = {
    'name': 'Notebooks',
    'key': 'notebook',
    'description': 'Named word collections per user.',
    'url_prefix': '/api/notebooks',
    'enabled': True,
}

blueprint = Blueprint('notebook', __name__)
