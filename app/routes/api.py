import logging
from datetime import date

from flask import Blueprint, current_app, jsonify, request

from app.exceptions import BookstoreError, InvalidArgument, NotFound
from app.models import Book, Category


logger = logging.getLogger(__name__)

api_blueprint = Blueprint('api', __name__)


@api_blueprint.errorhandler(BookstoreError)
def handle_bookstore_error(error):
    logger.info('%s %s rejected: %s', request.method, request.path, error.message)
    return jsonify({'success': False, 'error': error.reason, 'message': error.message}), error.status_code


def _book_service():
    return current_app.book_service


def _category_service():
    return current_app.category_service


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidArgument('Request body must be a JSON object')
    return data


def _parse_date(value):
    if value in (None, ''):
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f'publishedDate must be an ISO date (YYYY-MM-DD), got {value!r}')


def _resolve_category(data):
    # Accepts {"category": {"id": 1}} as well as {"categoryId": 1}
    category_ref = data.get('category')
    if isinstance(category_ref, dict):
        category_id = category_ref.get('id')
    elif category_ref is None:
        category_id = data.get('categoryId')
    else:
        raise InvalidArgument('category must be an object with an id')

    if category_id is None:
        return None
    if not isinstance(category_id, int) or isinstance(category_id, bool):
        raise InvalidArgument(f'Category id must be an integer, got {category_id!r}')
    category = _category_service().get_by_id(category_id)
    if category is None:
        raise InvalidArgument(f'Category {category_id} does not exist')
    return category


def _book_changes(data):
    """Translate a book payload into the full replacement record."""
    available = data.get('available', False)
    if not isinstance(available, bool):
        raise InvalidArgument('available must be true or false')
    return {
        'title': data.get('title'),
        'author': data.get('author'),
        'isbn': data.get('isbn'),
        'published_date': _parse_date(data.get('publishedDate')),
        'available': available,
        'category': _resolve_category(data),
    }


# Books

@api_blueprint.route('/books', methods=['GET'])
def get_books():
    return jsonify([book.to_dict() for book in _book_service().list_all()])


@api_blueprint.route('/books/uncategorized', methods=['GET'])
def get_uncategorized_books():
    return jsonify([book.to_dict() for book in _book_service().list_uncategorized()])


@api_blueprint.route('/books/<int:book_id>', methods=['GET'])
def get_book(book_id):
    book = _book_service().get_by_id(book_id)
    if book is None:
        raise NotFound(f'Book {book_id} not found')
    return jsonify(book.to_dict())


@api_blueprint.route('/books', methods=['POST'])
def create_book():
    book = Book.from_changes(_book_changes(_json_body()))
    saved = _book_service().save(book)
    return jsonify(saved.to_dict()), 201


@api_blueprint.route('/books/<int:book_id>', methods=['PUT'])
def update_book(book_id):
    changes = _book_changes(_json_body())
    updated = _book_service().update(book_id, changes)
    if updated is None:
        raise NotFound(f'Book {book_id} not found')
    return jsonify(updated.to_dict())


@api_blueprint.route('/books/<int:book_id>', methods=['DELETE'])
def delete_book(book_id):
    _book_service().delete(book_id)
    return '', 204


# Categories

@api_blueprint.route('/categories', methods=['GET'])
def get_categories():
    return jsonify([category.to_dict() for category in _category_service().list_all()])


@api_blueprint.route('/categories/<int:category_id>', methods=['GET'])
def get_category(category_id):
    category = _category_service().get_by_id(category_id)
    if category is None:
        raise NotFound(f'Category {category_id} not found')
    return jsonify(category.to_dict())


@api_blueprint.route('/categories', methods=['POST'])
def create_category():
    data = _json_body()
    category = Category(name=data.get('name'))
    saved = _category_service().save(category)
    return jsonify(saved.to_dict()), 201


@api_blueprint.route('/categories/<int:category_id>', methods=['PUT'])
def update_category(category_id):
    data = _json_body()
    category = _category_service().get_by_id(category_id)
    if category is None:
        raise NotFound(f'Category {category_id} not found')
    category.name = data.get('name')
    return jsonify(_category_service().save(category).to_dict())


@api_blueprint.route('/categories/<int:category_id>', methods=['DELETE'])
def delete_category(category_id):
    service = _category_service()
    if service.get_by_id(category_id) is None:
        raise NotFound(f'Category {category_id} not found')
    service.delete(category_id)
    return '', 204
