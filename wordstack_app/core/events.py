"""
Signal subscribers that record domain events in the application log.
Imported once by the bootstrap so the receivers get connected.
"""
import logging

from .signals import ai_content_generated, card_mastered, card_reviewed, word_completed

logger = logging.getLogger('wordstack_app.events')


@word_completed.connect
def on_word_completed(sender, **kwargs):
    logger.info(
        "Word completed: %s (id=%s, senses=%s)",
        kwargs.get('spelling'), kwargs.get('word_id'), kwargs.get('sense_count'),
    )


@card_reviewed.connect
def on_card_reviewed(sender, **kwargs):
    logger.info(
        "Card %s reviewed by user %s: %s -> proficiency %s",
        kwargs.get('flashcard_id'), kwargs.get('user_id'), kwargs.get('outcome'), kwargs.get('proficiency'),
    )


@card_mastered.connect
def on_card_mastered(sender, **kwargs):
    logger.info(
        "User %s mastered word %s (card %s removed)",
        kwargs.get('user_id'), kwargs.get('word_id'), kwargs.get('flashcard_id'),
    )


@ai_content_generated.connect
def on_ai_content_generated(sender, **kwargs):
    logger.debug(
        "AI content served: feature=%s user=%s cached=%s",
        kwargs.get('feature'), kwargs.get('user_id'), kwargs.get('cached'),
    )
