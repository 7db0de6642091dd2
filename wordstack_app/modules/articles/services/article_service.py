# File: wordstack_app/modules/articles/services/article_service.py
# Practice article generation, cached per (user, difficulty, word set).

import logging
from typing import Any, Dict, List, Optional, Sequence

from flask import current_app

from ....core.error_handlers import ForbiddenError, GenerationFailedError, InvalidArgumentError, NotFoundError
from ....core.extensions import db
from ....core.signals import ai_content_generated
from ....models import GeneratedArticle
from ....services.generation_cache import ARTICLE_CACHE, MISS, get_generation_cache
from ....utils.db_session import safe_commit
from ...ai_services.interface import get_chat_client
from ...notebook.interface import get_notebook_spellings, get_owned_notebook
from ..logics.article_parser import Unparseable, parse_article
from ..logics.prompts import DIFFICULTIES, DIFFICULTY_PROFILES, build_article_prompts
from ..schemas import ArticleResult

logger = logging.getLogger(__name__)


class ArticleService:
    """Article Generator."""

    GENERATION_TEMPERATURE = 0.7
    GENERATION_MAX_TOKENS = 2048

    @staticmethod
    def clean_words(words: Sequence[str]) -> List[str]:
        """Trim, drop blanks and case-insensitive duplicates, keep first-seen order."""
        if isinstance(words, str) or not isinstance(words, (list, tuple)):
            raise InvalidArgumentError('words must be a list of strings.')
        cleaned = []
        seen = set()
        for word in words:
            if not isinstance(word, str):
                raise InvalidArgumentError('words must be a list of strings.')
            stripped = word.strip()
            key = stripped.lower()
            if stripped and key not in seen:
                seen.add(key)
                cleaned.append(stripped)
        return cleaned

    @staticmethod
    def cache_key(user_id: int, difficulty: str, words: Sequence[str]) -> tuple:
        """Order-independent key for a word set."""
        return (user_id, difficulty, '|'.join(sorted(word.lower() for word in words)))

    @staticmethod
    def find_missing_words(english: str, words: Sequence[str]) -> tuple:
        text = english.lower()
        return tuple(word for word in words if word.lower() not in text)

    @classmethod
    def generate_article(cls, user_id: int, words: Sequence[str], difficulty: str) -> ArticleResult:
        """
        Generate (or serve from cache) an article using ``words``.

        Raises:
            InvalidArgumentError: empty word list, too many words or unknown difficulty.
            GenerationFailedError: the provider failed or returned no usable text.
        """
        cleaned = cls.clean_words(words)
        if not cleaned:
            raise InvalidArgumentError('At least one word is required.')
        max_words = current_app.config.get('ARTICLE_MAX_WORDS', 30)
        if len(cleaned) > max_words:
            raise InvalidArgumentError(f"At most {max_words} words can be used in one article.")
        if difficulty not in DIFFICULTY_PROFILES:
            raise InvalidArgumentError(
                f"Unknown difficulty {difficulty!r}, expected one of: {', '.join(DIFFICULTIES)}."
            )

        cache = get_generation_cache(ARTICLE_CACHE)
        key = cls.cache_key(user_id, difficulty, cleaned)
        cached = cache.get(key)
        if cached is not MISS:
            logger.info(f"Article cache hit for user {user_id} ({difficulty}, {len(cleaned)} words)")
            ai_content_generated.send(None, feature='article', user_id=user_id, cached=True)
            return cached

        language = current_app.config.get('DICTIONARY_TARGET_LANGUAGE', 'Simplified Chinese')
        system_prompt, user_prompt = build_article_prompts(cleaned, difficulty, language)
        success, content = get_chat_client().complete(
            system_prompt,
            user_prompt,
            temperature=cls.GENERATION_TEMPERATURE,
            max_tokens=cls.GENERATION_MAX_TOKENS,
            feature='article',
            context_ref=f"user={user_id}",
        )
        if not success:
            raise GenerationFailedError(f"Article generation failed: {content}")

        parsed = parse_article(content)
        if isinstance(parsed, Unparseable):
            logger.error(f"Article reply unusable ({parsed.reason}): {parsed.raw!r}")
            raise GenerationFailedError('Article generation returned no usable text.', raw_response=parsed.raw)

        translated = parsed.translated or current_app.config['ARTICLE_TRANSLATION_PLACEHOLDER']
        result = ArticleResult(
            english=parsed.english,
            translated=translated,
            difficulty=difficulty,
            words=tuple(cleaned),
            missing_words=cls.find_missing_words(parsed.english, cleaned),
            has_translation=parsed.has_translation,
        )
        if result.missing_words:
            logger.warning(f"Generated article is missing words: {', '.join(result.missing_words)}")

        if not parsed.has_translation:
            logger.info('Article reply had no recognizable translation, serving the placeholder')
        cache.set(key, result, current_app.config['ARTICLE_CACHE_TTL_SECONDS'])

        ai_content_generated.send(None, feature='article', user_id=user_id, cached=False)
        return result

    @classmethod
    def generate_for_notebook(cls, user_id: int, notebook_id: int, difficulty: str) -> Dict[str, Any]:
        """Generate from a notebook's words and store the article."""
        notebook = get_owned_notebook(user_id, notebook_id)
        spellings = get_notebook_spellings(user_id, notebook_id)
        if not spellings:
            raise InvalidArgumentError('The notebook has no words to build an article from.')

        max_words = current_app.config.get('ARTICLE_MAX_WORDS', 30)
        result = cls.generate_article(user_id, spellings[:max_words], difficulty)

        article = GeneratedArticle(
            user_id=user_id,
            notebook_id=notebook.notebook_id,
            title=f"{notebook.name}: {DIFFICULTY_PROFILES[difficulty].label} practice",
            difficulty=difficulty,
            english_content=result.english,
            translated_content=result.translated,
            words=list(result.words),
        )
        db.session.add(article)
        safe_commit(db.session)
        logger.info(f"Stored article {article.article_id} for notebook {notebook_id}")
        return article.to_dict()

    @staticmethod
    def list_articles(user_id: int) -> List[Dict[str, Any]]:
        articles = (
            GeneratedArticle.query.filter_by(user_id=user_id)
            .order_by(GeneratedArticle.created_at.desc(), GeneratedArticle.article_id.desc())
            .all()
        )
        return [article.to_dict(include_content=False) for article in articles]

    @staticmethod
    def get_article(user_id: int, article_id: int) -> Dict[str, Any]:
        article: Optional[GeneratedArticle] = db.session.get(GeneratedArticle, article_id)
        if article is None:
            raise NotFoundError('Article not found.', resource='article')
        if article.user_id != user_id:
            raise ForbiddenError('You cannot access this article.')
        return article.to_dict()
