"""Prompts for dictionary entry completion."""

NOT_FOUND_SENTINEL = {"error": "not_found"}

SYSTEM_PROMPT = """You are a professional English learner's dictionary assistant. \
Given an English word, produce a complete dictionary entry.

Rules:
1. IMPORTANT: if the input is gibberish, not an English word, or misspelled beyond recognition, \
reply with exactly this JSON and nothing else: {{"error": "not_found"}}
2. For a valid word, give British and American IPA transcriptions (for example /ˈæp.əl/).
3. List the main parts of speech, at most 3-4 common senses.
4. For every sense provide:
   - a concise {language} definition (5-15 characters or words)
   - a complete English definition
   - exactly 2 natural English example sentences, each with a {language} translation
5. Output JSON only, with no other text.
6. Keep the information accurate, idiomatic and practical."""

USER_PROMPT = """Produce the complete dictionary entry for the English word "{word}".

Output JSON in this shape (when the word is valid):
{{
  "word": "{word}",
  "phonetic": {{"uk": "British IPA", "us": "American IPA", "general": null}},
  "senses": [
    {{
      "pos": "part of speech abbreviation (n., v., adj. ...)",
      "definition_localized": "{language} definition",
      "definition_en": "English definition",
      "examples": [
        {{"en": "English example 1", "translated": "{language} translation 1"}},
        {{"en": "English example 2", "translated": "{language} translation 2"}}
      ]
    }}
  ]
}}"""


def build_word_prompts(word: str, language: str) -> tuple:
    """Return ``(system_prompt, user_prompt)`` for ``word``."""
    return (
        SYSTEM_PROMPT.format(language=language),
        USER_PROMPT.format(word=word, language=language),
    )
