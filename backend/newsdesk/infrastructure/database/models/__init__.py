from .article import ArticleModel
from .author import AuthorModel

__all__ = [
    "ArticleModel",
    "AuthorModel",
]
