"""Domain entities."""

from .article import Article, ImageRef, SubImage
from .author import Author, normalize_email
from .publisher import Publisher

__all__ = ["Article", "ImageRef", "SubImage", "Author", "Publisher", "normalize_email"]
