# File: wordstack_app/modules/notebook/routes.py
from flask import request
from flask_login import current_user, login_required

from ...core.error_handlers import success_response
from . import blueprint
from .schemas import AddNotebookWordSchema, CreateNotebookSchema
from .services.notebook_service import NotebookService


@blueprint.route('', methods=['GET'])
@login_required
def list_notebooks():
    return success_response(data=NotebookService.list_notebooks(current_user.user_id))


@blueprint.route('', methods=['POST'])
@login_required
def create_notebook():
    data = CreateNotebookSchema().load(request.get_json(silent=True) or {})
    notebook = NotebookService.create_notebook(current_user.user_id, data['name'], data['description'])
    return success_response(data=notebook), 201


@blueprint.route('/default', methods=['GET', 'POST'])
@login_required
def default_notebook():
    return success_response(data=NotebookService.get_default_notebook(current_user.user_id))


@blueprint.route('/<int:notebook_id>', methods=['GET'])
@login_required
def notebook_detail(notebook_id):
    return success_response(data=NotebookService.get_notebook_detail(current_user.user_id, notebook_id))


@blueprint.route('/<int:notebook_id>/words', methods=['POST'])
@login_required
def add_word(notebook_id):
    data = AddNotebookWordSchema().load(request.get_json(silent=True) or {})
    entry = NotebookService.add_word(current_user.user_id, notebook_id, data['word_id'])
    return success_response(data=entry), 201


@blueprint.route('/<int:notebook_id>/words/<int:word_id>', methods=['DELETE'])
@login_required
def remove_word(notebook_id, word_id):
    NotebookService.remove_word(current_user.user_id, notebook_id, word_id)
    return success_response(message='Word removed from notebook.')
