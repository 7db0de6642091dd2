"""
Tests for practice article generation.

Tests cover:
- Provider call and prompt contents
- Caching per (user, difficulty, word set) and expiry
- Placeholder translation for untranslated replies
- Input validation and provider failures
- Notebook articles (persisted)
"""

import json

import pytest

from wordstack_app.core.error_handlers import (
    ForbiddenError,
    GenerationFailedError,
    InvalidArgumentError,
    NotFoundError,
)
from wordstack_app.models import GeneratedArticle
from wordstack_app.modules.articles.interface import generate_article
from wordstack_app.modules.articles.services.article_service import ArticleService
from wordstack_app.modules.notebook.services.notebook_service import NotebookService


def _reply(english, translated='这是一篇文章。'):
    return True, json.dumps({'english': english, 'translated': translated}, ensure_ascii=False)


class TestGenerateArticle:

    def test_generates_from_provider(self, app, chat_client, caches):
        chat_client.queue(_reply('An apple and a banana sat on the table.'))

        result = generate_article(1, ['apple', 'banana'], 'primary')

        assert result.english == 'An apple and a banana sat on the table.'
        assert result.translated == '这是一篇文章。'
        assert result.difficulty == 'primary'
        assert result.words == ('apple', 'banana')
        assert result.missing_words == ()
        assert result.has_translation is True

        call = chat_client.calls[0]
        assert call['feature'] == 'article'
        assert call['temperature'] == 0.7
        assert 'apple, banana' in call['user_prompt']
        assert '80-120' in call['user_prompt']
        assert 'Simplified Chinese' in call['system_prompt']

    def test_same_word_set_served_from_cache(self, app, chat_client, caches):
        chat_client.queue(_reply('Apple and banana.'))

        first = ArticleService.generate_article(1, ['apple', 'banana'], 'cet4')
        second = ArticleService.generate_article(1, [' Banana', 'APPLE', 'apple'], 'cet4')

        assert second is first
        assert len(chat_client.calls) == 1

    def test_cache_is_per_user_and_difficulty(self, app, chat_client, caches):
        chat_client.queue(_reply('Apple one.'), _reply('Apple two.'), _reply('Apple three.'))

        ArticleService.generate_article(1, ['apple'], 'cet4')
        ArticleService.generate_article(1, ['apple'], 'cet6')
        ArticleService.generate_article(2, ['apple'], 'cet4')

        assert len(chat_client.calls) == 3

    def test_cache_expires_after_ttl(self, app, chat_client, caches, fake_clock):
        chat_client.queue(_reply('Apple first.'), _reply('Apple second.'))

        ArticleService.generate_article(1, ['apple'], 'highschool')
        fake_clock.advance(app.config['ARTICLE_CACHE_TTL_SECONDS'] - 1)
        assert ArticleService.generate_article(1, ['apple'], 'highschool').english == 'Apple first.'

        fake_clock.advance(1)
        assert ArticleService.generate_article(1, ['apple'], 'highschool').english == 'Apple second.'
        assert len(chat_client.calls) == 2

    def test_untranslated_reply_gets_placeholder_and_is_cached(self, app, chat_client, caches):
        article_cache, _ = caches
        chat_client.queue((True, 'The apple fell from the tree.'))

        result = ArticleService.generate_article(1, ['apple'], 'primary')

        assert result.english == 'The apple fell from the tree.'
        assert result.translated == app.config['ARTICLE_TRANSLATION_PLACEHOLDER']
        assert result.has_translation is False
        assert len(article_cache) == 1

        assert ArticleService.generate_article(1, ['apple'], 'primary') is result
        assert len(chat_client.calls) == 1

    def test_markup_stripped_from_both_fields(self, app, chat_client, caches):
        chat_client.queue(_reply(
            'The **apple** fell into the __river__ and floated away.',
            '**苹果**掉进了__河__里，漂走了。',
        ))

        result = ArticleService.generate_article(1, ['apple', 'river'], 'primary')

        assert 'apple' in result.english and 'river' in result.english
        for text in (result.english, result.translated):
            assert '**' not in text
            assert '__' not in text
        assert result.translated == '苹果掉进了河里，漂走了。'

    def test_reports_missing_words(self, app, chat_client, caches):
        chat_client.queue(_reply('Only the apple appears here.'))

        result = ArticleService.generate_article(1, ['apple', 'zebra'], 'primary')

        assert result.missing_words == ('zebra',)
        assert result.to_dict()['missing_words'] == ['zebra']

    def test_provider_failure(self, app, chat_client, caches):
        article_cache, _ = caches
        chat_client.queue((False, 'Completion provider error: timeout'))

        with pytest.raises(GenerationFailedError) as exc_info:
            ArticleService.generate_article(1, ['apple'], 'primary')

        assert exc_info.value.status_code == 502
        assert exc_info.value.code == 'GENERATION_FAILED'
        assert len(article_cache) == 0

    def test_blank_reply_fails(self, app, chat_client, caches):
        chat_client.queue((True, '<think>hmm</think>'))

        with pytest.raises(GenerationFailedError) as exc_info:
            ArticleService.generate_article(1, ['apple'], 'primary')

        assert exc_info.value.details['raw_response'] == '<think>hmm</think>'

    @pytest.mark.parametrize('words', [[], ['  ', ''], 'apple', [1, 2]])
    def test_invalid_word_lists(self, app, chat_client, caches, words):
        with pytest.raises(InvalidArgumentError):
            ArticleService.generate_article(1, words, 'primary')
        assert chat_client.calls == []

    def test_too_many_words(self, app, chat_client, caches):
        words = [f'word{i}' for i in range(app.config['ARTICLE_MAX_WORDS'] + 1)]
        with pytest.raises(InvalidArgumentError):
            ArticleService.generate_article(1, words, 'primary')

    def test_unknown_difficulty(self, app, chat_client, caches):
        with pytest.raises(InvalidArgumentError):
            ArticleService.generate_article(1, ['apple'], 'university')


class TestNotebookArticles:

    @pytest.fixture
    def notebook(self, user, make_word):
        notebook = NotebookService.create_notebook(user.user_id, 'Fruits')
        for spelling in ('apple', 'pear'):
            word = make_word(spelling)
            NotebookService.add_word(user.user_id, notebook['id'], word.word_id)
        return notebook

    def test_generate_for_notebook_persists(self, app, user, notebook, chat_client, caches):
        chat_client.queue(_reply('An apple and a pear.'))

        article = ArticleService.generate_for_notebook(user.user_id, notebook['id'], 'highschool')

        assert article['notebook_id'] == notebook['id']
        assert article['title'] == 'Fruits: high school practice'
        assert article['english'] == 'An apple and a pear.'
        assert sorted(article['words']) == ['apple', 'pear']
        assert GeneratedArticle.query.count() == 1

        listed = ArticleService.list_articles(user.user_id)
        assert [a['article_id'] for a in listed] == [article['article_id']]
        assert 'english' not in listed[0]

    def test_other_users_cannot_read_article(self, app, user, other_user, notebook, chat_client, caches):
        chat_client.queue(_reply('An apple and a pear.'))
        article = ArticleService.generate_for_notebook(user.user_id, notebook['id'], 'primary')

        with pytest.raises(ForbiddenError):
            ArticleService.get_article(other_user.user_id, article['article_id'])
        with pytest.raises(NotFoundError):
            ArticleService.get_article(user.user_id, 9999)

    def test_other_users_notebook_rejected(self, app, other_user, notebook, chat_client, caches):
        with pytest.raises(ForbiddenError):
            ArticleService.generate_for_notebook(other_user.user_id, notebook['id'], 'primary')
        assert chat_client.calls == []

    def test_empty_notebook_rejected(self, app, user, chat_client, caches):
        empty = NotebookService.create_notebook(user.user_id, 'Empty')
        with pytest.raises(InvalidArgumentError):
            ArticleService.generate_for_notebook(user.user_id, empty['id'], 'primary')
