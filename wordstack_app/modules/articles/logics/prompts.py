"""Prompt templates for practice articles."""

from dataclasses import dataclass
from typing import Dict, Sequence


@dataclass(frozen=True)
class DifficultyProfile:
    label: str
    word_range: tuple
    sentence_range: tuple
    style: str


DIFFICULTY_PROFILES: Dict[str, DifficultyProfile] = {
    'primary': DifficultyProfile(
        label='primary school',
        word_range=(80, 120),
        sentence_range=(6, 10),
        style=(
            "Write a warm, simple story for young children. Use very common words, "
            "short sentences in the present or simple past tense, and a clear, friendly tone."
        ),
    ),
    'highschool': DifficultyProfile(
        label='high school',
        word_range=(150, 220),
        sentence_range=(10, 14),
        style=(
            "Write an engaging narrative or short essay for teenage learners. Mix simple and "
            "compound sentences, use everyday vocabulary and a natural, lively register."
        ),
    ),
    'cet4': DifficultyProfile(
        label='CET-4 (college English, intermediate)',
        word_range=(220, 300),
        sentence_range=(12, 18),
        style=(
            "Write an informative article in the style of a college English reading passage. "
            "Use varied sentence structures, some subordinate clauses and a neutral, clear register."
        ),
    ),
    'cet6': DifficultyProfile(
        label='CET-6 (college English, upper intermediate)',
        word_range=(300, 400),
        sentence_range=(15, 22),
        style=(
            "Write a well-argued article in the style of an upper-level exam reading passage. "
            "Use complex sentences, precise academic vocabulary and a formal, analytical register."
        ),
    ),
}

DIFFICULTIES = tuple(DIFFICULTY_PROFILES)

SYSTEM_PROMPT = (
    "You are an English writing assistant for language learners. You write a short English "
    "article that uses the given words, then translate it into {language}. Reply with plain "
    "text only: no Markdown, no bold or italic markers, no headings, no explanations."
)

USER_PROMPT = """Level: {label}
{style}

Words to use: {words}

Requirements:
- Use every word above at least once, in a natural way.
- Length: about {min_words}-{max_words} English words, ideally {min_sentences}-{max_sentences} sentences.
- Plain text only. Do not highlight the target words.
- Then translate the whole article into {language}.

Return JSON only, in this shape:
{{"english": "the English article", "translated": "the {language} translation"}}"""


def build_article_prompts(words: Sequence[str], difficulty: str, language: str) -> tuple:
    """Return ``(system_prompt, user_prompt)`` for an article at ``difficulty``."""
    profile = DIFFICULTY_PROFILES[difficulty]
    user_prompt = USER_PROMPT.format(
        label=profile.label,
        style=profile.style,
        words=', '.join(words),
        min_words=profile.word_range[0],
        max_words=profile.word_range[1],
        min_sentences=profile.sentence_range[0],
        max_sentences=profile.sentence_range[1],
        language=language,
    )
    return SYSTEM_PROMPT.format(language=language), user_prompt
