# File: wordstack_app/modules/ai_services/clients/chat_client.py
# Client for the OpenAI-compatible chat completions endpoint.

import logging
import time
from typing import Dict, List, Optional, Tuple

from huggingface_hub import InferenceClient

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """
    Stateless worker for a chat-completions provider.

    Talks to any OpenAI-compatible base URL through ``huggingface_hub``.
    Failures are reported as ``(False, message)``, never raised, so the
    calling engine decides which domain error to surface.
    """

    def __init__(self, api_key: str, base_url: str, model_name: str, timeout: float = 60):
        self.model_name = model_name
        self.base_url = base_url
        self.timeout = timeout
        self._client = InferenceClient(base_url=base_url, api_key=api_key, timeout=timeout)
        logger.info(f"ChatCompletionClient ready: model={model_name}, base_url={base_url}")

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2048,
        feature: str = 'default',
        context_ref: Optional[str] = None,
    ) -> Tuple[bool, str]:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        start_time = time.time()
        try:
            response = self._client.chat_completion(
                messages,
                model=self.model_name,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:  # provider/transport errors become a failed result
            logger.error(f"Chat completion failed for {feature} ({context_ref or 'N/A'}): {e}", exc_info=True)
            return False, f"Completion provider error: {e}"

        duration = int((time.time() - start_time) * 1000)
        content = None
        if response.choices and response.choices[0].message:
            content = response.choices[0].message.content

        if not content or not content.strip():
            logger.warning(f"Empty completion for {feature} ({context_ref or 'N/A'}) after {duration}ms")
            return False, "Completion provider returned an empty response."

        logger.info(f"Completion for {feature} ({context_ref or 'N/A'}) took {duration}ms, {len(content)} chars")
        return True, content
