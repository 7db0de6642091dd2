from .logics.response_parser import ResponseParser
from .service_manager import get_chat_client, get_image_client

__all__ = ['ResponseParser', 'get_chat_client', 'get_image_client']
