# File: wordstack_app/modules/ai_services/service_manager.py
# Builds and caches the provider clients for the running app.

import threading

from flask import current_app

from ...core.error_handlers import UpstreamError
from .clients import ChatCompletionClient, ImageGenerationClient

CHAT_CLIENT_KEY = 'wordstack.chat_client'
IMAGE_CLIENT_KEY = 'wordstack.image_client'


def _require_api_key(config):
    if not config.get('SILICONFLOW_API_KEY'):
        raise UpstreamError(
            'The LLM provider is not configured (SILICONFLOW_API_KEY is empty).',
            code='PROVIDER_NOT_CONFIGURED',
        )


class AIServiceManager:
    """
    Hands out one client per app, created on first use from the app config.

    A client already stored on ``app.extensions`` (for example a test double)
    is returned as is.
    """
    _lock = threading.Lock()

    @classmethod
    def get_chat_client(cls):
        app = current_app._get_current_object()
        with cls._lock:
            client = app.extensions.get(CHAT_CLIENT_KEY)
            if client is None:
                config = app.config
                _require_api_key(config)
                app.logger.info(f"AIServiceManager: creating chat client for model {config['LLM_MODEL_ID']}")
                client = ChatCompletionClient(
                    api_key=config['SILICONFLOW_API_KEY'],
                    base_url=config['SILICONFLOW_BASE_URL'],
                    model_name=config['LLM_MODEL_ID'],
                    timeout=config['LLM_TIMEOUT_SECONDS'],
                )
                app.extensions[CHAT_CLIENT_KEY] = client
            return client

    @classmethod
    def get_image_client(cls):
        app = current_app._get_current_object()
        with cls._lock:
            client = app.extensions.get(IMAGE_CLIENT_KEY)
            if client is None:
                config = app.config
                _require_api_key(config)
                app.logger.info(f"AIServiceManager: creating image client for model {config['IMAGE_MODEL_ID']}")
                client = ImageGenerationClient(
                    api_key=config['SILICONFLOW_API_KEY'],
                    base_url=config['SILICONFLOW_BASE_URL'],
                    model_name=config['IMAGE_MODEL_ID'],
                    timeout=config['IMAGE_TIMEOUT_SECONDS'],
                )
                app.extensions[IMAGE_CLIENT_KEY] = client
            return client


def get_chat_client():
    return AIServiceManager.get_chat_client()


def get_image_client():
    return AIServiceManager.get_image_client()
