"""Conversion of stored words to the API shape."""

from typing import Any, Dict

POS_ABBREVIATIONS = {
    'noun': 'n.',
    'verb': 'v.',
    'adjective': 'adj.',
    'adverb': 'adv.',
    'pronoun': 'pron.',
    'preposition': 'prep.',
    'conjunction': 'conj.',
    'interjection': 'interj.',
}


def format_part_of_speech(part_of_speech: str) -> str:
    if not part_of_speech:
        return ''
    return POS_ABBREVIATIONS.get(part_of_speech.strip().lower(), part_of_speech)


def word_to_record(word, cached: bool) -> Dict[str, Any]:
    """Serialize a :class:`Word` with its senses and examples."""
    return {
        'id': word.word_id,
        'word': word.spelling,
        'phonetic': {
            'uk': word.phonetic_uk or None,
            'uk_audio': word.audio_uk_url or None,
            'us': word.phonetic_us or None,
            'us_audio': word.audio_us_url or None,
            'general': None,
        },
        'senses': [
            {
                'id': sense.sense_order,
                'pos': format_part_of_speech(sense.part_of_speech),
                'definition_localized': sense.definition_localized or sense.definition_en or '',
                'definition_en': sense.definition_en or None,
                'examples': [
                    {'en': example.sentence_en or '', 'translated': example.sentence_translated or ''}
                    for example in sense.examples
                ],
            }
            for sense in word.senses
        ],
        'source': 'dictionary+llm',
        'cached': cached,
    }
