# File: wordstack_app/modules/images/services/image_service.py
# Memory illustrations for words, cached in memory (never stored in the database).

import logging

from flask import current_app

from ....core.error_handlers import GenerationFailedError, InvalidArgumentError
from ....core.signals import ai_content_generated
from ....services.generation_cache import IMAGE_CACHE, MISS, get_generation_cache
from ...ai_services.interface import get_image_client

logger = logging.getLogger(__name__)

IMAGE_PROMPT = (
    'A high-quality, visually clear illustration that helps remember the English word "{word}". '
    'The style is slightly anime-like, warm and clean, no text, no watermark, single main subject, '
    'simple background.'
)

NEGATIVE_PROMPT = 'low quality, blurry, distorted, watermark, text, words, logo, noisy background'


class ImageService:

    @staticmethod
    def generate_word_image(word: str) -> str:
        """Return an image URL for ``word``, generating it on a cache miss."""
        normalized = (word or '').strip().lower()
        if not normalized:
            raise InvalidArgumentError('Word must not be empty.')

        cache = get_generation_cache(IMAGE_CACHE)
        cached = cache.get(normalized)
        if cached is not MISS:
            logger.debug(f"Image cache hit for '{normalized}'")
            ai_content_generated.send(None, feature='image', user_id=None, cached=True)
            return cached

        success, result = get_image_client().generate(
            IMAGE_PROMPT.format(word=word.strip()),
            negative_prompt=NEGATIVE_PROMPT,
        )
        if not success:
            raise GenerationFailedError(f"Image generation failed: {result}")

        cache.set(normalized, result, current_app.config['IMAGE_CACHE_TTL_SECONDS'])
        logger.info(f"Generated image for '{normalized}'")
        ai_content_generated.send(None, feature='image', user_id=None, cached=False)
        return result
