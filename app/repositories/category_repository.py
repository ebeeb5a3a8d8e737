from sqlalchemy import func

from app.models import Book, Category

from .base import SqlAlchemyRepository


class CategoryRepository(SqlAlchemyRepository):
    model = Category

    def count_books(self, category_id):
        """Number of persisted books whose category is ``category_id``."""
        return (
            self.session.query(func.count(Book.id))
            .filter(Book.category_id == category_id)
            .scalar()
        )

    def ids_with_books(self):
        """Ids of every category that has at least one persisted book, in one query."""
        rows = (
            self.session.query(Book.category_id)
            .filter(Book.category_id.isnot(None))
            .group_by(Book.category_id)
        )
        return {category_id for (category_id,) in rows}
