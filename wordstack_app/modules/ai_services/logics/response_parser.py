"""
Response Parser - Pure functions to clean and parse AI outputs.
"""
import json
import re
from typing import Any, Dict, Optional


class ResponseParser:
    """Utility to clean and structure AI responses."""

    _THINK_BLOCK = re.compile(r'<think>.*?</think>', re.DOTALL | re.IGNORECASE)

    @staticmethod
    def strip_reasoning(text: str) -> str:
        """Drop ``<think>...</think>`` blocks emitted by reasoning models."""
        if not text:
            return ""
        return ResponseParser._THINK_BLOCK.sub('', text).strip()

    @staticmethod
    def clean_markdown(text: str) -> str:
        """
        Remove markdown code fences from text.
        Example: ```json ... ``` -> ...
        """
        if not text:
            return ""

        cleaned = re.sub(r'^```\w*\s*', '', text.strip())
        cleaned = re.sub(r'\s*```$', '', cleaned)
        return cleaned.strip()

    @staticmethod
    def extract_json(text: str) -> Optional[Dict[str, Any]]:
        """
        Attempt to extract a JSON object from text.
        Text might be wrapped in ```json ... ``` or surrounded by prose.
        """
        if not text:
            return None

        text = ResponseParser.strip_reasoning(text)

        # 1. Strict parse
        try:
            data = json.loads(text)
            return data if isinstance(data, dict) else None
        except json.JSONDecodeError:
            pass

        # 2. Without the markdown wrapper
        cleaned = ResponseParser.clean_markdown(text)
        try:
            data = json.loads(cleaned)
            return data if isinstance(data, dict) else None
        except json.JSONDecodeError:
            pass

        # 3. First { to last }
        start = text.find('{')
        end = text.rfind('}')
        if start != -1 and end > start:
            try:
                data = json.loads(text[start:end + 1])
                return data if isinstance(data, dict) else None
            except json.JSONDecodeError:
                pass

        return None
