from .book_repository import BookRepository
from .category_repository import CategoryRepository

__all__ = ['BookRepository', 'CategoryRepository']
