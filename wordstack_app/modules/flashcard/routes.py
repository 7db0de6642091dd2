# File: wordstack_app/modules/flashcard/routes.py
from flask import request
from flask_login import current_user, login_required

from ...core.error_handlers import success_response
from . import blueprint
from .schemas import CreateFlashcardSchema, DueFlashcardsQuerySchema, ReviewFlashcardSchema
from .services.flashcard_service import FlashcardService, serialize_flashcard


@blueprint.route('', methods=['POST'])
@login_required
def create_flashcard():
    data = CreateFlashcardSchema().load(request.get_json(silent=True) or {})
    card = FlashcardService.create_flashcard(
        current_user.user_id,
        data['word_id'],
        source=data['source'],
        notebook_id=data['notebook_id'],
    )
    return success_response(data=serialize_flashcard(card))


@blueprint.route('', methods=['GET'])
@login_required
def list_flashcards():
    return success_response(data=FlashcardService.list_flashcards(current_user.user_id))


@blueprint.route('/due', methods=['GET'])
@login_required
def list_due_flashcards():
    """Review queue: ?mode=recent|notebook&notebook_id=&limit="""
    args = DueFlashcardsQuerySchema().load(request.args)
    cards = FlashcardService.list_due_flashcards(
        current_user.user_id,
        mode=args['mode'],
        notebook_id=args['notebook_id'],
        limit=args['limit'],
    )
    return success_response(data=cards)


@blueprint.route('/review', methods=['POST'])
@login_required
def review_flashcard():
    data = ReviewFlashcardSchema().load(request.get_json(silent=True) or {})
    result = FlashcardService.review_flashcard(current_user.user_id, data['flashcard_id'], data['result'])
    return success_response(data=result.to_dict())


@blueprint.route('/<int:flashcard_id>', methods=['GET'])
@login_required
def get_flashcard(flashcard_id):
    return success_response(data=FlashcardService.get_flashcard(current_user.user_id, flashcard_id))


@blueprint.route('/<int:flashcard_id>', methods=['DELETE'])
@login_required
def delete_flashcard(flashcard_id):
    FlashcardService.delete_flashcard(current_user.user_id, flashcard_id)
    return success_response(message='Flashcard deleted.')
