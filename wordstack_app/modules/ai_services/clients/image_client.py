# File: wordstack_app/modules/ai_services/clients/image_client.py
# Client for the image generations endpoint.

import logging
from typing import Optional, Tuple

import requests

logger = logging.getLogger(__name__)


class ImageGenerationClient:
    """Posts a prompt to ``{base_url}/images/generations`` and returns the image URL."""

    IMAGE_SIZE = '1024x1024'
    INFERENCE_STEPS = 20
    GUIDANCE_SCALE = 7.5

    def __init__(self, api_key: str, base_url: str, model_name: str, timeout: float = 120):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.model_name = model_name
        self.timeout = timeout

    def generate(self, prompt: str, negative_prompt: Optional[str] = None) -> Tuple[bool, str]:
        url = f"{self.base_url}/images/generations"
        payload = {
            'model': self.model_name,
            'prompt': prompt,
            'image_size': self.IMAGE_SIZE,
            'batch_size': 1,
            'num_inference_steps': self.INFERENCE_STEPS,
            'guidance_scale': self.GUIDANCE_SCALE,
        }
        if negative_prompt:
            payload['negative_prompt'] = negative_prompt
        headers = {
            'Authorization': f"Bearer {self.api_key}",
            'Content-Type': 'application/json',
        }

        try:
            response = requests.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Image generation request failed: {e}")
            return False, f"Image provider error: {e}"

        if not response.ok:
            logger.error(f"Image provider returned {response.status_code}: {response.text[:500]}")
            return False, f"Image provider returned HTTP {response.status_code}"

        try:
            data = response.json()
        except ValueError:
            logger.error(f"Image provider returned non-JSON body: {response.text[:500]}")
            return False, "Image provider returned an unreadable response."

        images = data.get('images') or []
        image_url = images[0].get('url') if images and isinstance(images[0], dict) else None
        if not image_url:
            logger.error(f"Image provider response has no URL: {data}")
            return False, "Image provider response did not include an image URL."

        return True, image_url
