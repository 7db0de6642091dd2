"""
Tests for declarative blueprint registration.
"""

from flask import Flask

from wordstack_app.core.module_registry import DEFAULT_MODULES, ModuleDefinition, register_modules
from wordstack_app.modules import flashcard


def _rules(app):
    return {rule.rule for rule in app.url_map.iter_rules()}


class TestModuleRegistry:

    def test_prefix_taken_from_module_metadata(self):
        app = Flask('registry_test')
        register_modules(app, DEFAULT_MODULES)

        rules = _rules(app)
        assert '/api/flashcards/due' in rules
        assert '/api/words/<string:spelling>' in rules
        assert '/api/articles/generate-from-words' in rules

    def test_explicit_prefix_wins(self):
        app = Flask('registry_test')
        register_modules(app, [ModuleDefinition('wordstack_app.modules.images.routes', 'blueprint', url_prefix='/v2/img')])

        assert '/v2/img/word' in _rules(app)

    def test_disabled_module_skipped(self, monkeypatch):
        monkeypatch.setitem(flashcard.module_metadata, 'enabled', False)
        app = Flask('registry_test')
        register_modules(app, DEFAULT_MODULES)

        rules = _rules(app)
        assert not any(rule.startswith('/api/flashcards') for rule in rules)
        assert '/api/notebooks' in rules
