import unittest
from unittest.mock import patch

from app.config import TestingConfig
from app.models import Book, Category
from flask_app import create_app


class WebTestCase(unittest.TestCase):

    def setUp(self):
        self.app = create_app(TestingConfig)
        self.client = self.app.test_client()
        self.book_service = self.app.book_service
        self.category_service = self.app.category_service

    def tearDown(self):
        self.app.db_session.remove()
        self.app.engine.dispose()

    def add_category(self, name):
        return self.category_service.save(Category(name=name)).id

    def add_book(self, title, category_id=None, **fields):
        book = Book.with_title(title)
        for name, value in fields.items():
            setattr(book, name, value)
        if category_id is not None:
            self.category_service.get_by_id(category_id).add_book(book)
        return self.book_service.save(book).id


class TestHomePage(WebTestCase):

    def test_home_page(self):
        response = self.client.get('/')
        html = response.get_data(as_text=True)

        self.assertEqual(response.status_code, 200)
        self.assertIn('<title>Book Management</title>', html)
        self.assertIn('href="/books"', html)
        self.assertIn('href="/categories"', html)

    def test_unknown_page_renders_404(self):
        response = self.client.get('/nowhere')

        self.assertEqual(response.status_code, 404)
        self.assertIn('Not Found', response.get_data(as_text=True))


class TestBookPages(WebTestCase):

    def test_book_list_page(self):
        self.add_book("Clean Code", author="Robert Martin", isbn="9780132350884")
        self.add_book("Refactoring", author="Martin Fowler")

        html = self.client.get('/books').get_data(as_text=True)

        self.assertIn('<title>Book List</title>', html)
        self.assertIn('id="booksTable"', html)
        self.assertIn('Clean Code', html)
        self.assertIn('Refactoring', html)
        self.assertIn('href="/books/1/edit"', html)
        self.assertIn('href="/books/2/edit"', html)
        self.assertIn('href="/books/new">+ New Book</a>', html)

    def test_new_book_form(self):
        self.add_category("Fiction")

        response = self.client.get('/books/new')
        html = response.get_data(as_text=True)

        self.assertEqual(response.status_code, 200)
        self.assertIn('<title>New Book</title>', html)
        self.assertIn('name="title"', html)
        self.assertIn('name="btn_submit"', html)
        self.assertIn('Fiction', html)

    def test_create_book_redirects_to_list(self):
        category_id = self.add_category("Software")

        response = self.client.post('/books', data={
            'title': 'TDD',
            'author': 'Kent Beck',
            'isbn': '0321146530',
            'published_date': '2002-11-18',
            'available': 'y',
            'category_id': str(category_id),
        })

        self.assertEqual(response.status_code, 302)
        self.assertTrue(response.headers['Location'].endswith('/books'))
        book = self.book_service.list_all()[0]
        self.assertEqual(book.title, 'TDD')
        self.assertTrue(book.available)
        self.assertEqual(book.category.name, 'Software')

    def test_create_book_without_title_is_rejected(self):
        response = self.client.post('/books', data={'title': '', 'category_id': '0'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.book_service.list_all(), [])

    def test_edit_book_form_is_prefilled(self):
        book_id = self.add_book("Original Title", author="Original Author", isbn="1234567890")

        response = self.client.get(f'/books/{book_id}/edit')
        html = response.get_data(as_text=True)

        self.assertIn('<title>Edit Book</title>', html)
        self.assertIn('value="Original Title"', html)
        self.assertIn('value="Original Author"', html)
        self.assertIn('value="1234567890"', html)

    def test_edit_missing_book_returns_404(self):
        self.assertEqual(self.client.get('/books/99/edit').status_code, 404)

    def test_update_book_redirects_to_list(self):
        book_id = self.add_book("Old Title", author="Old Author")

        response = self.client.post(f'/books/{book_id}', data={
            'title': 'Updated Title',
            'author': 'Updated Author',
            'isbn': '9999999999',
            'published_date': '2024-12-31',
            'available': 'y',
            'category_id': '0',
        })

        self.assertEqual(response.status_code, 302)
        book = self.book_service.get_by_id(book_id)
        self.assertEqual(book.title, 'Updated Title')
        self.assertEqual(book.isbn, '9999999999')

    def test_delete_book_redirects_to_list(self):
        book_id = self.add_book("To Delete")

        response = self.client.post(f'/books/{book_id}/delete')

        self.assertEqual(response.status_code, 302)
        self.assertIsNone(self.book_service.get_by_id(book_id))

    def test_uncategorized_page(self):
        category_id = self.add_category("Fiction")
        self.add_book("Categorized", category_id=category_id)
        self.add_book("Loose")

        html = self.client.get('/books/uncategorized').get_data(as_text=True)

        self.assertIn('<title>Uncategorized Books</title>', html)
        self.assertIn('Loose', html)
        self.assertNotIn('Categorized<', html)


class TestCategoryPages(WebTestCase):

    def test_categories_page_without_categories(self):
        html = self.client.get('/categories').get_data(as_text=True)

        self.assertIn('<title>Categories</title>', html)
        self.assertIn('id="categoriesTable"', html)
        self.assertIn('href="/categories/new">+ New Category</a>', html)

    def test_categories_page_lists_categories_with_edit_links(self):
        self.add_category("Fiction")
        self.add_category("Science")

        html = self.client.get('/categories').get_data(as_text=True)

        self.assertIn('Fiction', html)
        self.assertIn('Science', html)
        self.assertIn('href="/categories/edit/1"', html)
        self.assertIn('href="/categories/edit/2"', html)

    def test_category_with_books_shows_warning(self):
        category_id = self.add_category("Fiction")
        self.add_book("Dune", category_id=category_id)

        html = self.client.get('/categories').get_data(as_text=True)

        self.assertIn('category-has-books-warning', html)
        self.assertIn('has books', html)

    def test_only_categories_with_books_show_warning(self):
        fiction_id = self.add_category("Fiction")
        self.add_category("Empty")
        self.add_book("Dune", category_id=fiction_id)

        with patch.object(self.category_service, 'has_books') as has_books:
            html = self.client.get('/categories').get_data(as_text=True)

        self.assertEqual(html.count('category-has-books-warning'), 1)
        has_books.assert_not_called()

    def test_new_category_form(self):
        html = self.client.get('/categories/new').get_data(as_text=True)

        self.assertIn('<title>New Category</title>', html)
        self.assertIn('name="name"', html)
        self.assertIn('name="btn_submit"', html)

    def test_create_category(self):
        response = self.client.post('/categories', data={'name': 'Poetry'})

        self.assertEqual(response.status_code, 302)
        self.assertEqual([c.name for c in self.category_service.list_all()], ['Poetry'])

    def test_edit_category_form(self):
        category_id = self.add_category("Original Name")

        html = self.client.get(f'/categories/edit/{category_id}').get_data(as_text=True)

        self.assertIn('<title>Edit Category</title>', html)
        self.assertIn('value="Original Name"', html)

    def test_edit_missing_category_returns_404(self):
        self.assertEqual(self.client.get('/categories/edit/99').status_code, 404)

    def test_update_category(self):
        category_id = self.add_category("Original Name")

        response = self.client.post(f'/categories/{category_id}', data={'name': 'Modified Name'})

        self.assertEqual(response.status_code, 302)
        self.assertEqual(self.category_service.get_by_id(category_id).name, 'Modified Name')

    def test_delete_category(self):
        category_id = self.add_category("Empty")

        response = self.client.post(f'/categories/{category_id}/delete')

        self.assertEqual(response.status_code, 302)
        self.assertIsNone(self.category_service.get_by_id(category_id))

    def test_delete_category_with_books_shows_error(self):
        category_id = self.add_category("Fiction")
        self.add_book("Dune", category_id=category_id)

        response = self.client.post(f'/categories/{category_id}/delete')

        self.assertEqual(response.status_code, 400)
        self.assertIn('cannot be deleted', response.get_data(as_text=True))
        self.assertIsNotNone(self.category_service.get_by_id(category_id))


if __name__ == '__main__':
    unittest.main()
