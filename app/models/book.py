from database_setup import Base
from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship


class Book(Base):
    __tablename__ = 'books'

    id = Column('book_id', Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=True)
    author = Column(String(100), nullable=True)
    isbn = Column(String(20), nullable=True)
    published_date = Column(Date, nullable=True)
    available = Column(Boolean, nullable=False, default=False)
    category_id = Column(Integer, ForeignKey('categories.category_id'), nullable=True, index=True)

    # Only Category.add_book / Category.remove_book should assign this
    category = relationship("Category", back_populates="books")

    def __init__(self, **kwargs):
        kwargs.setdefault('available', False)
        super().__init__(**kwargs)

    @classmethod
    def with_title(cls, title):
        return cls(title=title)

    @classmethod
    def from_changes(cls, changes):
        """New unsaved book from a BookService.update style mapping.

        The category, if any, is attached through Category.add_book.
        """
        book = cls.with_title(changes.get('title'))
        book.author = changes.get('author')
        book.isbn = changes.get('isbn')
        book.published_date = changes.get('published_date')
        book.available = changes.get('available', False)
        category = changes.get('category')
        if category is not None:
            category.add_book(book)
        return book

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "publishedDate": self.published_date.isoformat() if self.published_date else None,
            "available": self.available,
            "category": {
                "id": self.category.id,
                "name": self.category.name
            } if self.category is not None else None
        }

    def __repr__(self):
        return f"<Book id={self.id} title={self.title!r}>"
