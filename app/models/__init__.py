from .book import Book
from .category import Category

__all__ = ['Book', 'Category']
