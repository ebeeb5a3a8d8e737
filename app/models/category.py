from database_setup import Base
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.exceptions import InvalidArgument
from .book import Book


class Category(Base):
    __tablename__ = 'categories'

    id = Column('category_id', Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=True)

    # Deleting a category never nulls its books out; the foreign key rejects it
    books = relationship("Book", order_by=Book.id, back_populates="category", passive_deletes="all")

    def _contains(self, book):
        # Membership is by identity, not by column values
        return any(member is book for member in self.books)

    def add_book(self, book):
        """Attach ``book`` to this category and point the book back at it.

        Raises InvalidArgument for None or for a book already in the category.
        """
        if book is None:
            raise InvalidArgument("Book must not be null")
        if self._contains(book):
            raise InvalidArgument("Book already present in category")
        self.books.append(book)
        book.category = self

    def remove_book(self, book):
        """Detach ``book`` from this category and clear its category reference.

        Raises InvalidArgument for None or for a book that is not in the category.
        """
        if book is None:
            raise InvalidArgument("Book must not be null")
        if not self._contains(book):
            raise InvalidArgument("Book not found in category")
        self.books.remove(book)
        book.category = None

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name
        }

    def __repr__(self):
        return f"<Category id={self.id} name={self.name!r}>"
