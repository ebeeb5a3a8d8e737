from flask import Blueprint, abort, current_app, flash, redirect, render_template, url_for

from app.exceptions import ConstraintViolation
from app.forms import NO_CATEGORY, BookForm, CategoryForm
from app.models import Book, Category


web_blueprint = Blueprint('web', __name__)


def _book_service():
    return current_app.book_service


def _category_service():
    return current_app.category_service


def _book_form(book=None):
    form = BookForm()
    form.set_category_choices(_category_service().list_all())
    if book is not None and not form.is_submitted():
        form.fill_from(book)
    return form


def _selected_category(form):
    if form.category_id.data in (None, NO_CATEGORY):
        return None
    category = _category_service().get_by_id(form.category_id.data)
    if category is None:
        abort(400)
    return category


def _render_categories(status=200):
    service = _category_service()
    categories = service.list_all()
    with_books = service.ids_with_books()
    return render_template('categories/list.html', categories=categories, with_books=with_books), status


@web_blueprint.route('/')
def index():
    return render_template('index.html')


# Books

@web_blueprint.route('/books')
def list_books():
    return render_template('books/list.html', books=_book_service().list_all(), title='Book List')


@web_blueprint.route('/books/uncategorized')
def list_uncategorized_books():
    return render_template('books/list.html', books=_book_service().list_uncategorized(),
                           title='Uncategorized Books')


@web_blueprint.route('/books/new')
def new_book():
    return render_template('books/form.html', form=_book_form(), book=None, title='New Book',
                           action=url_for('web.create_book'))


@web_blueprint.route('/books', methods=['POST'])
def create_book():
    form = _book_form()
    if not form.validate_on_submit():
        return render_template('books/form.html', form=form, book=None, title='New Book',
                               action=url_for('web.create_book')), 400

    book = Book.from_changes(form.to_changes(_selected_category(form)))
    _book_service().save(book)
    flash(f'Book "{book.title}" saved.', 'success')
    return redirect(url_for('web.list_books'))


@web_blueprint.route('/books/<int:book_id>/edit')
def edit_book(book_id):
    book = _book_service().get_by_id(book_id)
    if book is None:
        abort(404)
    return render_template('books/form.html', form=_book_form(book), book=book, title='Edit Book',
                           action=url_for('web.update_book', book_id=book_id))


@web_blueprint.route('/books/<int:book_id>', methods=['POST'])
def update_book(book_id):
    book = _book_service().get_by_id(book_id)
    if book is None:
        abort(404)

    form = _book_form(book)
    if not form.validate_on_submit():
        return render_template('books/form.html', form=form, book=book, title='Edit Book',
                               action=url_for('web.update_book', book_id=book_id)), 400

    _book_service().update(book_id, form.to_changes(_selected_category(form)))
    flash('Book updated.', 'success')
    return redirect(url_for('web.list_books'))


@web_blueprint.route('/books/<int:book_id>/delete', methods=['POST'])
def delete_book(book_id):
    _book_service().delete(book_id)
    flash('Book deleted.', 'success')
    return redirect(url_for('web.list_books'))


# Categories

@web_blueprint.route('/categories')
def list_categories():
    return _render_categories()


@web_blueprint.route('/categories/new')
def new_category():
    return render_template('categories/form.html', form=CategoryForm(), title='New Category',
                           action=url_for('web.create_category'))


@web_blueprint.route('/categories', methods=['POST'])
def create_category():
    form = CategoryForm()
    if not form.validate_on_submit():
        return render_template('categories/form.html', form=form, title='New Category',
                               action=url_for('web.create_category')), 400

    _category_service().save(Category(name=form.name.data))
    flash(f'Category "{form.name.data}" saved.', 'success')
    return redirect(url_for('web.list_categories'))


@web_blueprint.route('/categories/edit/<int:category_id>')
def edit_category(category_id):
    category = _category_service().get_by_id(category_id)
    if category is None:
        abort(404)
    return render_template('categories/form.html', form=CategoryForm(obj=category), title='Edit Category',
                           action=url_for('web.update_category', category_id=category_id))


@web_blueprint.route('/categories/<int:category_id>', methods=['POST'])
def update_category(category_id):
    category = _category_service().get_by_id(category_id)
    if category is None:
        abort(404)

    form = CategoryForm()
    if not form.validate_on_submit():
        return render_template('categories/form.html', form=form, title='Edit Category',
                               action=url_for('web.update_category', category_id=category_id)), 400

    category.name = form.name.data
    _category_service().save(category)
    flash('Category updated.', 'success')
    return redirect(url_for('web.list_categories'))


@web_blueprint.route('/categories/<int:category_id>/delete', methods=['POST'])
def delete_category(category_id):
    if _category_service().get_by_id(category_id) is None:
        abort(404)
    try:
        _category_service().delete(category_id)
    except ConstraintViolation as e:
        flash(e.message, 'danger')
        return _render_categories(status=400)

    flash('Category deleted.', 'success')
    return redirect(url_for('web.list_categories'))
