# File: wordstack_app/modules/dictionary/services/dictionary_service.py
# Word lookup: serve complete entries from the database, complete the rest via the LLM.

import logging
import random
import re
from typing import Any, Dict, List, Optional

from flask import current_app
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from ....core.error_handlers import InvalidArgumentError, InvalidWordError, StorageBusyError, UpstreamError
from ....core.extensions import db
from ....core.signals import word_completed
from ....models import Example, Notebook, NotebookWord, Sense, Word
from ....utils.db_session import safe_commit
from ...ai_services.interface import ResponseParser, get_chat_client
from ..logics.formatters import word_to_record
from ..logics.prompts import NOT_FOUND_SENTINEL, build_word_prompts
from ..schemas import WordPayloadSchema

logger = logging.getLogger(__name__)

_NOT_FOUND_PATTERN = re.compile(r'"error"\s*:\s*"not_found"')

WORD_OF_THE_DAY_FALLBACK = {
    'word_id': -1,
    'text': 'hello',
    'simple_definition': 'used as a greeting',
    'example_sentence': 'Hello! It is nice to see you here.',
}


class DictionaryService:
    """Dictionary Completion Engine."""

    COMPLETION_TEMPERATURE = 0.1
    COMPLETION_MAX_TOKENS = 2048

    @staticmethod
    def normalize_spelling(spelling: Optional[str]) -> str:
        return (spelling or '').strip().lower()

    @staticmethod
    def _load_word(spelling: str) -> Optional[Word]:
        return (
            Word.query.options(selectinload(Word.senses).selectinload(Sense.examples))
            .filter_by(spelling=spelling)
            .first()
        )

    @classmethod
    def get_word_detail(cls, spelling: str) -> Dict[str, Any]:
        """
        Return the dictionary entry for ``spelling``.

        A stored entry is returned as is when it is complete (every sense has
        a localized definition and at least one example). Otherwise the
        completion provider is asked for the full entry, which replaces
        whatever was stored.

        Raises:
            InvalidArgumentError: ``spelling`` is blank.
            InvalidWordError: the provider did not recognize the word.
            UpstreamError: the provider failed or returned an unusable entry.
            StorageBusyError: the entry could not be stored; nothing was written.
        """
        normalized = cls.normalize_spelling(spelling)
        if not normalized:
            raise InvalidArgumentError('Word must not be empty.')

        word = cls._load_word(normalized)
        if word is not None and word.is_complete():
            logger.debug(f"Dictionary hit for '{normalized}'")
            return word_to_record(word, cached=True)

        logger.info(f"Dictionary miss for '{normalized}', requesting completion")
        payload = cls._request_completion(normalized)
        word_id = cls._persist_completion(normalized, payload)

        db.session.expire_all()
        word = cls._load_word(normalized)
        if word is None:
            raise StorageBusyError(f"The entry for '{normalized}' was not stored, please retry.")
        word_completed.send(None, spelling=normalized, word_id=word_id, sense_count=len(word.senses))
        return word_to_record(word, cached=False)

    @classmethod
    def _request_completion(cls, spelling: str) -> Dict[str, Any]:
        language = current_app.config.get('DICTIONARY_TARGET_LANGUAGE', 'Simplified Chinese')
        system_prompt, user_prompt = build_word_prompts(spelling, language)

        success, content = get_chat_client().complete(
            system_prompt,
            user_prompt,
            temperature=cls.COMPLETION_TEMPERATURE,
            max_tokens=cls.COMPLETION_MAX_TOKENS,
            feature='dictionary',
            context_ref=spelling,
        )
        if not success:
            raise UpstreamError(f"Dictionary completion failed: {content}")

        data = ResponseParser.extract_json(content)
        if (data and data.get('error') == NOT_FOUND_SENTINEL['error']) or (data is None and _NOT_FOUND_PATTERN.search(content)):
            logger.info(f"Provider does not recognize '{spelling}'")
            raise InvalidWordError(spelling)

        if data is None:
            logger.error(f"Unparseable dictionary completion for '{spelling}': {content}")
            raise UpstreamError(
                'Dictionary completion returned malformed JSON.',
                code='MALFORMED_COMPLETION',
                raw_response=content,
            )

        try:
            return WordPayloadSchema().load(data)
        except ValidationError as e:
            logger.error(f"Invalid dictionary completion for '{spelling}': {e.messages}; raw={content}")
            raise UpstreamError(
                'Dictionary completion is missing required fields.',
                code='MALFORMED_COMPLETION',
                raw_response=content,
            ) from e

    @staticmethod
    def _persist_completion(spelling: str, payload: Dict[str, Any]) -> int:
        """Upsert the word and replace its senses in one transaction."""
        phonetic = payload.get('phonetic') or {}
        phonetic_uk = phonetic.get('uk') or phonetic.get('general')
        phonetic_us = phonetic.get('us') or phonetic.get('general')

        word = Word.query.filter_by(spelling=spelling).first()
        if word is None:
            try:
                with db.session.begin_nested():
                    word = Word(spelling=spelling, phonetic_uk=phonetic_uk, phonetic_us=phonetic_us)
                    db.session.add(word)
            except IntegrityError:
                # Another request created the row first; update it instead.
                logger.info(f"Concurrent completion of '{spelling}', updating the existing row")
                word = Word.query.filter_by(spelling=spelling).one()

        word.phonetic_uk = phonetic_uk
        word.phonetic_us = phonetic_us

        # Old rows must be gone before the new sense_order values are inserted.
        word.senses.clear()
        db.session.flush()

        for order, sense_data in enumerate(payload['senses'], start=1):
            sense = Sense(
                sense_order=order,
                part_of_speech=sense_data['pos'].strip(),
                definition_en=sense_data['definition_en'].strip(),
                definition_localized=sense_data['definition_localized'].strip(),
            )
            sense.examples = [
                Example(sentence_en=example['en'].strip(), sentence_translated=example['translated'].strip())
                for example in sense_data['examples']
            ]
            word.senses.append(sense)

        safe_commit(db.session)
        logger.info(f"Stored completion for '{spelling}' with {len(payload['senses'])} senses")
        return word.word_id

    @staticmethod
    def search_words(query: Optional[str], limit: int = 20) -> List[Dict[str, Any]]:
        """Prefix search over stored spellings."""
        normalized = (query or '').strip().lower()
        if not normalized:
            return []
        escaped = normalized.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
        words = (
            Word.query.filter(Word.spelling.like(f"{escaped}%", escape='\\'))
            .order_by(Word.spelling.asc())
            .limit(limit)
            .all()
        )
        return [{'id': word.word_id, 'spelling': word.spelling} for word in words]

    @classmethod
    def get_word_of_the_day(cls, user_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Pick a word to feature: one of the user's notebook words when they
        have any, otherwise a random stored word. Falls back to a fixed entry
        when nothing usable is stored.
        """
        try:
            selected = None
            if user_id:
                entries = (
                    NotebookWord.query.join(Notebook)
                    .filter(Notebook.user_id == user_id)
                    .limit(100)
                    .all()
                )
                if entries:
                    selected = random.choice(entries).word
                    logger.debug(f"Word of the day from notebooks: {selected.spelling}")

            if selected is None:
                total = Word.query.count()
                if total:
                    selected = Word.query.order_by(Word.word_id).offset(random.randrange(total)).first()

            if selected is not None:
                word = cls._load_word(selected.spelling)
                if word is not None and word.senses:
                    first_sense = word.senses[0]
                    simple_definition = (
                        first_sense.definition_localized
                        or (first_sense.definition_en or '')[:50]
                        or 'No definition available.'
                    )
                    example_sentence = 'No example available.'
                    if first_sense.examples:
                        first_example = first_sense.examples[0]
                        example_sentence = (
                            first_example.sentence_translated
                            or first_example.sentence_en
                            or example_sentence
                        )
                    return {
                        'word_id': word.word_id,
                        'text': word.spelling,
                        'simple_definition': simple_definition,
                        'example_sentence': example_sentence,
                    }
        except SQLAlchemyError as e:
            logger.error(f"Word of the day lookup failed: {e}", exc_info=True)
            db.session.rollback()

        logger.warning('Word of the day: nothing usable stored, using fallback')
        return dict(WORD_OF_THE_DAY_FALLBACK)
