from .dictionary_service import DictionaryService

__all__ = ['DictionaryService']
