"""
Tests for dictionary lookup and LLM completion.

Tests cover:
- Complete entries served from the database
- Completion of unknown and incomplete words
- not_found / malformed provider replies
- Concurrent completion of the same word
- Search and word of the day
"""

import json

import pytest

from wordstack_app import db
from wordstack_app.core.error_handlers import InvalidArgumentError, InvalidWordError, StorageBusyError, UpstreamError
from wordstack_app.models import Example, Sense, Word
from wordstack_app.modules.dictionary.interface import get_word_by_id, get_word_detail, normalize_spelling
from wordstack_app.modules.dictionary.services.dictionary_service import (
    WORD_OF_THE_DAY_FALLBACK,
    DictionaryService,
)
from wordstack_app.modules.notebook.services.notebook_service import NotebookService

HELLO_PAYLOAD = {
    'word': 'hello',
    'phonetic': {'uk': '/həˈləʊ/', 'us': '/həˈloʊ/'},
    'senses': [
        {
            'pos': 'interjection',
            'definition_localized': '你好',
            'definition_en': 'used as a greeting',
            'examples': [{'en': 'Hello, how are you?', 'translated': '你好，你怎么样？'}],
        },
        {
            'pos': 'noun',
            'definition_localized': '招呼',
            'definition_en': 'an utterance of hello',
            'examples': [
                {'en': 'She gave me a warm hello.', 'translated': '她热情地和我打招呼。'},
                {'en': 'Say hello to him.', 'translated': '替我向他问好。'},
            ],
            'extra_key': 'ignored',
        },
    ],
}


def _reply(payload=HELLO_PAYLOAD):
    return True, json.dumps(payload, ensure_ascii=False)


class TestGetWordDetail:

    def test_complete_word_served_without_provider(self, app, chat_client, make_word):
        make_word('apple', definition='a round fruit', translated='苹果')

        record = get_word_detail('  Apple ')

        assert record['cached'] is True
        assert record['word'] == 'apple'
        assert record['senses'][0]['pos'] == 'n.'
        assert record['senses'][0]['definition_localized'] == '苹果'
        assert record['senses'][0]['examples'] == [{'en': 'This is apple.', 'translated': '这是例句。'}]
        assert chat_client.calls == []

    def test_unknown_word_completed_and_stored(self, app, chat_client):
        chat_client.queue(_reply())

        record = DictionaryService.get_word_detail('Hello')

        assert record['cached'] is False
        assert record['word'] == 'hello'
        assert record['phonetic']['uk'] == '/həˈləʊ/'
        assert [s['id'] for s in record['senses']] == [1, 2]
        assert record['senses'][0]['pos'] == 'interj.'
        assert len(record['senses'][1]['examples']) == 2

        call = chat_client.calls[0]
        assert call['feature'] == 'dictionary'
        assert call['temperature'] == 0.1
        assert 'hello' in call['user_prompt']

        word = Word.query.filter_by(spelling='hello').one()
        assert word.is_complete()
        assert get_word_by_id(word.word_id) is word

    def test_second_lookup_is_cached(self, app, chat_client):
        chat_client.queue(_reply())

        DictionaryService.get_word_detail('hello')
        record = DictionaryService.get_word_detail('hello')

        assert record['cached'] is True
        assert len(chat_client.calls) == 1

    def test_incomplete_word_senses_replaced(self, app, chat_client):
        word = Word(spelling='hello')
        stale = Sense(sense_order=1, part_of_speech='noun', definition_en='old definition')
        stale.examples = [Example(sentence_en='old example')]
        word.senses.append(stale)
        db.session.add(word)
        db.session.commit()
        word_id = word.word_id
        chat_client.queue(_reply())

        record = DictionaryService.get_word_detail('hello')

        assert record['id'] == word_id
        assert record['cached'] is False
        assert Word.query.count() == 1
        assert Sense.query.count() == 2
        assert Example.query.filter_by(sentence_en='old example').count() == 0
        assert [s.sense_order for s in Sense.query.order_by(Sense.sense_order)] == [1, 2]

    def test_word_created_while_completing_is_updated_not_duplicated(self, app, chat_client):
        def racing_request(system_prompt, user_prompt):
            # Another request stores the word while this one waits on the provider.
            db.session.add(Word(spelling='hello', phonetic_uk='/old/'))
            db.session.commit()
            return _reply()

        chat_client.queue(racing_request)

        record = DictionaryService.get_word_detail('hello')

        assert Word.query.count() == 1
        assert record['phonetic']['uk'] == '/həˈləʊ/'
        assert [s['id'] for s in record['senses']] == [1, 2]

    def test_not_found_reply(self, app, chat_client):
        chat_client.queue((True, '{"error": "not_found"}'))

        with pytest.raises(InvalidWordError) as exc_info:
            DictionaryService.get_word_detail('asdfgh')

        assert exc_info.value.status_code == 422
        assert Word.query.count() == 0

    def test_not_found_inside_prose(self, app, chat_client):
        chat_client.queue((True, 'Sorry. {"error": "not_found"} is my answer, {oops'))

        with pytest.raises(InvalidWordError):
            DictionaryService.get_word_detail('qwerty')

    def test_malformed_reply(self, app, chat_client):
        chat_client.queue((True, 'I cannot produce JSON today.'))

        with pytest.raises(UpstreamError) as exc_info:
            DictionaryService.get_word_detail('hello')

        assert exc_info.value.code == 'MALFORMED_COMPLETION'
        assert exc_info.value.details['raw_response'] == 'I cannot produce JSON today.'
        assert Word.query.count() == 0

    def test_reply_missing_examples_rejected(self, app, chat_client):
        payload = {
            'senses': [{'pos': 'noun', 'definition_localized': '你好', 'definition_en': 'greeting', 'examples': []}]
        }
        chat_client.queue(_reply(payload))

        with pytest.raises(UpstreamError) as exc_info:
            DictionaryService.get_word_detail('hello')

        assert exc_info.value.code == 'MALFORMED_COMPLETION'

    def test_provider_failure(self, app, chat_client):
        chat_client.queue((False, 'Completion provider error: boom'))

        with pytest.raises(UpstreamError) as exc_info:
            DictionaryService.get_word_detail('hello')

        assert exc_info.value.code == 'UPSTREAM_ERROR'

    def test_locked_commit_stores_nothing(self, app, chat_client, locked_commit):
        chat_client.queue(_reply())
        locked_commit()

        with pytest.raises(StorageBusyError):
            DictionaryService.get_word_detail('hello')

        assert Word.query.count() == 0
        assert Sense.query.count() == 0

    def test_entry_missing_after_persist(self, app, chat_client, monkeypatch):
        chat_client.queue(_reply())
        monkeypatch.setattr(DictionaryService, '_persist_completion', staticmethod(lambda spelling, payload: 1))

        with pytest.raises(StorageBusyError) as exc_info:
            DictionaryService.get_word_detail('hello')

        assert exc_info.value.status_code == 503

    @pytest.mark.parametrize('spelling', ['', '   ', None])
    def test_blank_spelling(self, app, chat_client, spelling):
        with pytest.raises(InvalidArgumentError):
            DictionaryService.get_word_detail(spelling)


class TestSearchAndWordOfTheDay:

    def test_normalize_spelling(self):
        assert normalize_spelling('  HeLLo ') == 'hello'

    def test_prefix_search(self, app, make_word):
        for spelling in ('apple', 'applet', 'banana', 'app_store'):
            make_word(spelling)

        results = DictionaryService.search_words('APP')
        assert [r['spelling'] for r in results] == ['app_store', 'apple', 'applet']

        assert [r['spelling'] for r in DictionaryService.search_words('app_')] == ['app_store']
        assert DictionaryService.search_words('   ') == []
        assert len(DictionaryService.search_words('app', limit=1)) == 1

    def test_word_of_the_day_fallback(self, app, user):
        assert DictionaryService.get_word_of_the_day(user.user_id) == WORD_OF_THE_DAY_FALLBACK

    def test_word_of_the_day_prefers_notebook_words(self, app, user, make_word):
        make_word('banana')
        apple = make_word('apple', translated='苹果')
        notebook = NotebookService.create_notebook(user.user_id, 'Fruits')
        NotebookService.add_word(user.user_id, notebook['id'], apple.word_id)

        result = DictionaryService.get_word_of_the_day(user.user_id)

        assert result['text'] == 'apple'
        assert result['simple_definition'] == '苹果'
        assert result['example_sentence'] == '这是例句。'

    def test_word_of_the_day_random_stored_word(self, app, make_word):
        make_word('banana')
        assert DictionaryService.get_word_of_the_day()['text'] == 'banana'
