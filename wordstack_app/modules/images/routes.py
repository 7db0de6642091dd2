# File: wordstack_app/modules/images/routes.py
from flask import request
from flask_login import login_required

from ...core.error_handlers import success_response
from . import blueprint
from .schemas import GenerateWordImageSchema
from .services.image_service import ImageService


@blueprint.route('/word', methods=['POST'])
@login_required
def generate_word_image():
    data = GenerateWordImageSchema().load(request.get_json(silent=True) or {})
    return success_response(data={'image_url': ImageService.generate_word_image(data['word'])})
