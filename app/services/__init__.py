from .book_service import BookService
from .category_service import CategoryService

__all__ = ['BookService', 'CategoryService']
