# File: wordstack_app/modules/dictionary/routes.py
from flask import request
from flask_login import current_user, login_required

from ...core.error_handlers import success_response
from . import blueprint
from .schemas import WordSearchQuerySchema
from .services.dictionary_service import DictionaryService


@blueprint.route('/search', methods=['GET'])
@login_required
def search_words():
    """Prefix suggestions for the search box."""
    args = WordSearchQuerySchema().load(request.args)
    return success_response(data=DictionaryService.search_words(args['query'], limit=args['limit']))


@blueprint.route('/word-of-the-day', methods=['GET'])
@login_required
def word_of_the_day():
    return success_response(data=DictionaryService.get_word_of_the_day(current_user.user_id))


@blueprint.route('/<string:spelling>', methods=['GET'])
@login_required
def get_word(spelling):
    return success_response(data=DictionaryService.get_word_detail(spelling))
