# File: wordstack_app/config.py
# Application configuration, read from the environment (.env supported).

import os

from dotenv import load_dotenv

load_dotenv()

# This file lives in <root>/wordstack_app/, so the project root is one level up.
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# SQLite database used when SQLALCHEMY_DATABASE_URI is not provided
DATABASE_PATH = os.path.join(BASE_DIR, "database", "wordstack.db")


def _env_int(name, default):
    value = os.environ.get(name)
    if value is None or value == '':
        return default
    return int(value)


class Config:
    """
    Configuration for the WordStack Flask application.
    """
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'connect_args': {'timeout': 30},
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR')
    LOG_JSON = os.environ.get('LOG_JSON', '').lower() in ('1', 'true', 'yes')

    # LLM provider (OpenAI-compatible chat completions + image generations)
    SILICONFLOW_API_KEY = os.environ.get('SILICONFLOW_API_KEY', '')
    SILICONFLOW_BASE_URL = os.environ.get('SILICONFLOW_BASE_URL', 'https://api.siliconflow.cn/v1')
    LLM_MODEL_ID = os.environ.get('LLM_MODEL_ID', 'deepseek-ai/DeepSeek-R1-0528-Qwen3-8B')
    IMAGE_MODEL_ID = os.environ.get('IMAGE_MODEL_ID', 'Kwai-Kolors/Kolors')
    LLM_TIMEOUT_SECONDS = _env_int('LLM_TIMEOUT_SECONDS', 60)
    IMAGE_TIMEOUT_SECONDS = _env_int('IMAGE_TIMEOUT_SECONDS', 120)

    # Dictionary completion
    DICTIONARY_TARGET_LANGUAGE = os.environ.get('DICTIONARY_TARGET_LANGUAGE', 'Simplified Chinese')

    # Ephemeral generation cache (seconds)
    ARTICLE_CACHE_TTL_SECONDS = _env_int('ARTICLE_CACHE_TTL_SECONDS', 5 * 60)
    IMAGE_CACHE_TTL_SECONDS = _env_int('IMAGE_CACHE_TTL_SECONDS', 60 * 60)

    # Article generation
    ARTICLE_MAX_WORDS = _env_int('ARTICLE_MAX_WORDS', 30)
    ARTICLE_TRANSLATION_PLACEHOLDER = os.environ.get(
        'ARTICLE_TRANSLATION_PLACEHOLDER', '(Translation is not available for this article.)'
    )

    # Flashcard scheduling
    FLASHCARD_MASTERY_THRESHOLD = 5
    FLASHCARD_DUE_DEFAULT_LIMIT = 20
    FLASHCARD_DUE_MAX_LIMIT = 100

    @classmethod
    def init_app(cls, app):
        """Create the folders the configuration points at."""
        if app.config['SQLALCHEMY_DATABASE_URI'] == f'sqlite:///{DATABASE_PATH}':
            os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
        if app.config.get('LOG_DIR'):
            os.makedirs(app.config['LOG_DIR'], exist_ok=True)
