import datetime
import os
import sqlite3
import sys

import pytest
from sqlalchemy.exc import OperationalError

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wordstack_app import create_app, db
from wordstack_app.config import Config
from wordstack_app.models import Example, Sense, User, Word
from wordstack_app.modules.ai_services.service_manager import CHAT_CLIENT_KEY, IMAGE_CLIENT_KEY
from wordstack_app.services.generation_cache import ARTICLE_CACHE, IMAGE_CACHE, GenerationCache


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    SECRET_KEY = 'test-secret'
    SILICONFLOW_API_KEY = 'test-key'
    LOG_LEVEL = 'WARNING'
    LOG_DIR = None


class FakeClock:
    """Controllable clock: ``advance`` moves both readings forward."""

    def __init__(self, start=None):
        self._now = start or datetime.datetime(2024, 1, 1, 12, 0, 0)
        self._monotonic = 1000.0

    def now(self):
        return self._now

    def monotonic(self):
        return self._monotonic

    def advance(self, seconds):
        self._now += datetime.timedelta(seconds=seconds)
        self._monotonic += seconds


class FakeCompletionClient:
    """
    Stands in for the chat completion client.

    ``responses`` are returned in order; a callable response is invoked with
    the call arguments and its return value is used.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def complete(self, system_prompt, user_prompt, temperature=0.7, max_tokens=2048,
                 feature='default', context_ref=None):
        self.calls.append({
            'system_prompt': system_prompt,
            'user_prompt': user_prompt,
            'temperature': temperature,
            'max_tokens': max_tokens,
            'feature': feature,
            'context_ref': context_ref,
        })
        if not self.responses:
            raise AssertionError('FakeCompletionClient called more often than expected')
        response = self.responses.pop(0)
        if callable(response):
            response = response(system_prompt, user_prompt)
        return response


class FakeImageClient:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def generate(self, prompt, negative_prompt=None):
        self.calls.append({'prompt': prompt, 'negative_prompt': negative_prompt})
        if not self.responses:
            raise AssertionError('FakeImageClient called more often than expected')
        return self.responses.pop(0)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def chat_client(app):
    fake = FakeCompletionClient()
    app.extensions[CHAT_CLIENT_KEY] = fake
    return fake


@pytest.fixture
def image_client(app):
    fake = FakeImageClient()
    app.extensions[IMAGE_CLIENT_KEY] = fake
    return fake


@pytest.fixture
def caches(app, fake_clock):
    """Replace the generation caches with ones driven by ``fake_clock``."""
    app.extensions[ARTICLE_CACHE] = GenerationCache(ARTICLE_CACHE, clock=fake_clock)
    app.extensions[IMAGE_CACHE] = GenerationCache(IMAGE_CACHE, clock=fake_clock)
    return app.extensions[ARTICLE_CACHE], app.extensions[IMAGE_CACHE]


def _make_user(username):
    user = User(username=username, email=f'{username}@example.com')
    user.set_password('password')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def user(app):
    return _make_user('alice')


@pytest.fixture
def other_user(app):
    return _make_user('bob')


@pytest.fixture
def make_word(app):
    """Store a complete dictionary entry and return it."""

    def _make(spelling, definition='a test definition', translated='测试'):
        word = Word(spelling=spelling, phonetic_uk='/test/', phonetic_us='/test/')
        sense = Sense(
            sense_order=1,
            part_of_speech='noun',
            definition_en=definition,
            definition_localized=translated,
        )
        sense.examples = [Example(sentence_en=f'This is {spelling}.', sentence_translated='这是例句。')]
        word.senses.append(sense)
        db.session.add(word)
        db.session.commit()
        return word

    return _make


@pytest.fixture
def login(client):
    def _login(username='alice', password='password'):
        response = client.post('/api/auth/login', json={'login': username, 'password': password})
        assert response.status_code == 200
        return response

    return _login


@pytest.fixture
def locked_commit(app, monkeypatch):
    """
    Call the returned function to make the next ``db.session.commit`` fail the
    way SQLite does when the write lock is held past the busy timeout.
    """
    real_commit = db.session.commit
    state = {'armed': False, 'rejected': 0}

    def _commit():
        if state['armed']:
            state['armed'] = False
            state['rejected'] += 1
            raise OperationalError('COMMIT', {}, sqlite3.OperationalError('database is locked'))
        return real_commit()

    monkeypatch.setattr(db.session, 'commit', _commit)

    def _arm():
        state['armed'] = True
        return state

    return _arm
