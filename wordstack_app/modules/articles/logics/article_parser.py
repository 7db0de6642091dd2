"""
Article Parser - turns a free-form LLM reply into (english, translated).

Models are asked for JSON but do not always comply, so parsing falls back
through progressively weaker strategies instead of failing:

    json            {"english": ..., "translated": ...} anywhere in the reply
    script_split    split at the first CJK character
    paragraph_split split at the first blank line
    plain           whole reply as English, no translation

Every strategy strips Markdown emphasis and code fences from both fields.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from ...ai_services.logics.response_parser import ResponseParser

STRATEGY_JSON = 'json'
STRATEGY_SCRIPT_SPLIT = 'script_split'
STRATEGY_PARAGRAPH_SPLIT = 'paragraph_split'
STRATEGY_PLAIN = 'plain'


@dataclass(frozen=True)
class ParsedArticle:
    english: str
    translated: str
    strategy: str

    @property
    def has_translation(self) -> bool:
        return bool(self.translated)


@dataclass(frozen=True)
class Unparseable:
    reason: str
    raw: str


ParseOutcome = Union[ParsedArticle, Unparseable]

# Han, Kana, Hangul, CJK punctuation and full-width forms
_CJK_CHAR = re.compile(r"[\u3000-\u303f\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uac00-\ud7af\uff00-\uffef]")
_BLANK_LINE = re.compile(r'\n[ \t]*\n')

_FENCE_LINE = re.compile(r'^[ \t]*```[\w-]*[ \t]*$', re.MULTILINE)
_BOLD_STARS = re.compile(r'\*\*(.+?)\*\*', re.DOTALL)
_BOLD_UNDERSCORES = re.compile(r'__(.+?)__', re.DOTALL)
_ITALIC_STAR = re.compile(r'(?<![\w*])\*(?!\s)([^*\n]+?)(?<!\s)\*(?![\w*])')
_ITALIC_UNDERSCORE = re.compile(r'(?<![\w_])_(?!\s)([^_\n]+?)(?<!\s)_(?![\w_])')

_ENGLISH_LABEL = re.compile(
    r'^\s*(?:english(?:\s+(?:text|version|article))?|article)\s*[:：]\s*', re.IGNORECASE
)
_TRANSLATION_LABEL = re.compile(
    r'^\s*(?:(?:chinese\s+)?translation|translated'
    r'|中文翻译|中文译文|中文|翻译|译文)\s*[:：]\s*',
    re.IGNORECASE,
)
_TRAILING_TRANSLATION_LABEL = re.compile(
    r'(?:^|\n)[ \t]*(?:(?:chinese\s+)?translation|translated)[ \t]*[:：]?[ \t]*$',
    re.IGNORECASE,
)


def strip_markup(text: str) -> str:
    """Remove code fences and bold/italic markers, keeping the wrapped text."""
    if not text:
        return ''
    cleaned = _FENCE_LINE.sub('', text)
    cleaned = cleaned.replace('```', '')
    cleaned = _BOLD_STARS.sub(r'\1', cleaned)
    cleaned = _BOLD_UNDERSCORES.sub(r'\1', cleaned)
    cleaned = cleaned.replace('**', '').replace('__', '')
    cleaned = _ITALIC_STAR.sub(r'\1', cleaned)
    cleaned = _ITALIC_UNDERSCORE.sub(r'\1', cleaned)
    return cleaned.strip()


def _clean_english(text: str) -> str:
    text = strip_markup(text)
    text = _ENGLISH_LABEL.sub('', text)
    text = _TRAILING_TRANSLATION_LABEL.sub('', text)
    return text.strip()


def _clean_translation(text: str) -> str:
    text = strip_markup(text)
    return _TRANSLATION_LABEL.sub('', text).lstrip(':\uff1a \t\n').strip()


def _from_json(text: str):
    data = ResponseParser.extract_json(text)
    if not data:
        return None
    english = data.get('english')
    if not isinstance(english, str) or not english.strip():
        return None
    translated = data.get('translated')
    if not isinstance(translated, str):
        translated = data.get('translation') if isinstance(data.get('translation'), str) else ''
    return ParsedArticle(_clean_english(english), _clean_translation(translated), STRATEGY_JSON)


def _split_at_cjk(text: str):
    match = _CJK_CHAR.search(text)
    if not match or match.start() == 0:
        return None
    english = _clean_english(text[:match.start()])
    translated = _clean_translation(text[match.start():])
    if not english or not translated:
        return None
    return ParsedArticle(english, translated, STRATEGY_SCRIPT_SPLIT)


def _split_at_blank_line(text: str):
    parts = _BLANK_LINE.split(text.strip(), maxsplit=1)
    if len(parts) != 2:
        return None
    english = _clean_english(parts[0])
    translated = _clean_translation(parts[1])
    if not english or not translated:
        return None
    return ParsedArticle(english, translated, STRATEGY_PARAGRAPH_SPLIT)


def parse_article(raw: str) -> ParseOutcome:
    """Parse a generation reply. Only an empty reply is :class:`Unparseable`."""
    text = ResponseParser.strip_reasoning(raw or '')
    if not text.strip():
        return Unparseable(reason='empty response', raw=raw or '')

    parsed = _from_json(text)
    if parsed is not None:
        return parsed

    body = strip_markup(text)
    for strategy in (_split_at_cjk, _split_at_blank_line):
        parsed = strategy(body)
        if parsed is not None:
            return parsed

    english = _clean_english(body)
    if not english:
        return Unparseable(reason='no article text', raw=raw)
    return ParsedArticle(english, '', STRATEGY_PLAIN)
