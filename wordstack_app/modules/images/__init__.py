# File: wordstack_app/modules/images/__init__.py
from flask import Blueprint

module_metadata = {
    'name': 'Word Images',
    'key': 'images',
    'description': 'Memory illustrations generated for single words.',
    'url_prefix': '/api/images',
    'enabled': True,
}

blueprint = Blueprint('images', __name__)
