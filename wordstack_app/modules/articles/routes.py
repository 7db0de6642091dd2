# File: wordstack_app/modules/articles/routes.py
from flask import request
from flask_login import current_user, login_required

from ...core.error_handlers import success_response
from . import blueprint
from .schemas import GenerateForNotebookSchema, GenerateFromWordsSchema
from .services.article_service import ArticleService


@blueprint.route('/generate-from-words', methods=['POST'])
@login_required
def generate_from_words():
    """Ad-hoc article from a word list; served from the short-lived cache, not stored."""
    data = GenerateFromWordsSchema().load(request.get_json(silent=True) or {})
    result = ArticleService.generate_article(current_user.user_id, data['words'], data['level'])
    return success_response(data=result.to_dict())


@blueprint.route('/generate', methods=['POST'])
@login_required
def generate_for_notebook():
    data = GenerateForNotebookSchema().load(request.get_json(silent=True) or {})
    article = ArticleService.generate_for_notebook(current_user.user_id, data['notebook_id'], data['level'])
    return success_response(data=article), 201


@blueprint.route('', methods=['GET'])
@login_required
def list_articles():
    return success_response(data=ArticleService.list_articles(current_user.user_id))


@blueprint.route('/<int:article_id>', methods=['GET'])
@login_required
def get_article(article_id):
    return success_response(data=ArticleService.get_article(current_user.user_id, article_id))
