from app.models import Book

from .base import SqlAlchemyRepository


class BookRepository(SqlAlchemyRepository):
    model = Book

    def find_by_category_is_null(self):
        return (
            self.session.query(Book)
            .filter(Book.category_id.is_(None))
            .order_by(Book.id)
            .all()
        )
