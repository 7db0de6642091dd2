"""Public API of the articles module."""
from .logics.article_parser import ParsedArticle, Unparseable, parse_article
from .logics.prompts import DIFFICULTIES
from .schemas import ArticleResult
from .services.article_service import ArticleService


def generate_article(user_id, words, difficulty) -> ArticleResult:
    return ArticleService.generate_article(user_id, words, difficulty)


__all__ = ['DIFFICULTIES', 'ArticleResult', 'ParsedArticle', 'Unparseable', 'parse_article', 'generate_article']
