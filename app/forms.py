from flask_wtf import FlaskForm
from wtforms import BooleanField, DateField, SelectField, StringField, SubmitField
from wtforms.validators import DataRequired, Length, Optional


NO_CATEGORY = 0


class BookForm(FlaskForm):
    title = StringField('Title', validators=[DataRequired(), Length(max=200)])
    author = StringField('Author', validators=[Optional(), Length(max=100)])
    isbn = StringField('ISBN', validators=[Optional(), Length(max=20)])
    published_date = DateField('Published date', format='%Y-%m-%d', validators=[Optional()])
    available = BooleanField('Available')
    category_id = SelectField('Category', coerce=int, default=NO_CATEGORY)
    btn_submit = SubmitField('Save')

    def set_category_choices(self, categories):
        self.category_id.choices = [(NO_CATEGORY, 'No category')] + [
            (category.id, category.name) for category in categories
        ]

    def fill_from(self, book):
        self.title.data = book.title
        self.author.data = book.author
        self.isbn.data = book.isbn
        self.published_date.data = book.published_date
        self.available.data = book.available
        self.category_id.data = book.category_id or NO_CATEGORY

    def to_changes(self, category):
        """Full replacement record for BookService.update."""
        return {
            'title': self.title.data,
            'author': self.author.data or None,
            'isbn': self.isbn.data or None,
            'published_date': self.published_date.data,
            'available': bool(self.available.data),
            'category': category,
        }


class CategoryForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(), Length(min=1, max=100)])
    btn_submit = SubmitField('Save')
