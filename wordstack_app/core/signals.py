"""
Central Signal Registry.

Usage:
    # Publisher (sender)
    from wordstack_app.core.signals import card_reviewed
    card_reviewed.send(None, user_id=1, flashcard_id=2, ...)

    # Subscriber (receiver) - in core/events.py
    @card_reviewed.connect
    def on_card_reviewed(sender, **kwargs):
        ...
"""
from blinker import Namespace

# ============================================
# Dictionary Signals
# ============================================
dictionary_signals = Namespace()

# Signal: Fired after an LLM-completed word has been persisted
# Payload: spelling (str), word_id (int), sense_count (int)
word_completed = dictionary_signals.signal('word_completed')

# ============================================
# Learning Signals
# ============================================
learning_signals = Namespace()

# Signal: Fired when a flashcard review has been saved
# Payload: user_id, flashcard_id, outcome ('remembered'|'forgotten'), proficiency
card_reviewed = learning_signals.signal('card_reviewed')

# Signal: Fired when a flashcard crossed the mastery threshold and was removed
# Payload: user_id, flashcard_id, word_id
card_mastered = learning_signals.signal('card_mastered')

# ============================================
# AI Services Signals
# ============================================
ai_signals = Namespace()

# Signal: Fired when generated content is served
# Payload: feature ('article'|'image'), user_id (optional), cached (bool)
ai_content_generated = ai_signals.signal('ai_content_generated')
