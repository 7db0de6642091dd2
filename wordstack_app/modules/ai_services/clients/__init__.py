from .chat_client import ChatCompletionClient
from .image_client import ImageGenerationClient

__all__ = ['ChatCompletionClient', 'ImageGenerationClient']
