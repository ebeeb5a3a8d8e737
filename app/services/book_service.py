import logging

from app.exceptions import InvalidArgument


logger = logging.getLogger(__name__)

# Fields replaced wholesale by BookService.update, with the value used when
# a key is missing from the changes.
REPLACED_FIELDS = {
    'title': None,
    'author': None,
    'isbn': None,
    'published_date': None,
    'available': False,
}
UPDATABLE_KEYS = frozenset(REPLACED_FIELDS) | {'category'}


class BookService:

    def __init__(self, book_repository):
        self.book_repository = book_repository

    def list_all(self):
        return list(self.book_repository.find_all())

    def get_by_id(self, book_id):
        """Return the book with ``book_id`` or None if there is none."""
        return self.book_repository.find_by_id(book_id)

    def save(self, book):
        is_new = book.id is None
        saved = self.book_repository.save(book)
        logger.info("%s book %s (%r)", "Created" if is_new else "Updated", saved.id, saved.title)
        return saved

    def update(self, book_id, changes):
        """Replace every mutable field of the book at ``book_id``.

        ``changes`` maps field names (title, author, isbn, published_date,
        available, category) to their new values. A field left out is reset,
        not kept: callers send the complete record.

        Returns the saved book, or None when ``book_id`` does not exist.
        Raises InvalidArgument for unknown keys before anything is modified.
        """
        unknown = set(changes) - UPDATABLE_KEYS
        if unknown:
            raise InvalidArgument(f"Unknown book fields: {', '.join(sorted(unknown))}")

        existing = self.book_repository.find_by_id(book_id)
        if existing is None:
            return None

        for field, default in REPLACED_FIELDS.items():
            setattr(existing, field, changes.get(field, default))
        self._move_to_category(existing, changes.get('category'))

        saved = self.book_repository.save(existing)
        logger.info("Updated book %s (%r)", saved.id, saved.title)
        return saved

    def delete(self, book_id):
        self.book_repository.delete_by_id(book_id)
        logger.info("Deleted book %s", book_id)

    def list_uncategorized(self):
        return list(self.book_repository.find_by_category_is_null())

    @staticmethod
    def _move_to_category(book, category):
        current = book.category
        if current is category:
            return
        if current is not None:
            current.remove_book(book)
        if category is not None:
            category.add_book(book)
