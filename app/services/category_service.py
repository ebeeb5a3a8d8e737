import logging

from sqlalchemy.exc import IntegrityError

from app.exceptions import ConstraintViolation


logger = logging.getLogger(__name__)

HAS_BOOKS_MESSAGE = "Category has associated books, cannot be deleted"


class CategoryService:
    """CRUD over categories, guarding deletes against dangling book references.

    ``category_repository`` is the persistence gateway; it is the source of
    truth for whether a category still has books, not the ``books``
    collection of an in-memory Category.
    """

    def __init__(self, category_repository):
        self.category_repository = category_repository

    def list_all(self):
        return list(self.category_repository.find_all())

    def get_by_id(self, category_id):
        """Return the category with ``category_id`` or None if there is none."""
        return self.category_repository.find_by_id(category_id)

    def save(self, category):
        is_new = category.id is None
        saved = self.category_repository.save(category)
        logger.info("%s category %s (%r)", "Created" if is_new else "Updated", saved.id, saved.name)
        return saved

    def has_books(self, category_id):
        return self.category_repository.count_books(category_id) > 0

    def ids_with_books(self):
        return self.category_repository.ids_with_books()

    def delete(self, category_id):
        # The count is only a fast path; a book saved after it is still caught
        # by the foreign key when the delete is flushed.
        if self.has_books(category_id):
            logger.warning("Refused to delete category %s: it still has books", category_id)
            raise ConstraintViolation(HAS_BOOKS_MESSAGE)
        try:
            self.category_repository.delete_by_id(category_id)
        except IntegrityError:
            logger.warning("Delete of category %s hit the books foreign key", category_id)
            raise ConstraintViolation(HAS_BOOKS_MESSAGE)
        logger.info("Deleted category %s", category_id)
