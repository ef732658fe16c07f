"""Form classes: one per create/update payload.

A form validates and cleans raw request fields; views only build or update
records from ``form.record_fields()`` after ``validate_on_submit()``.
"""

import bleach
from dateutil.parser import isoparse
from flask_wtf import FlaskForm
from wtforms import DateField, SelectField, SelectMultipleField, StringField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, Regexp
from wtforms.validators import Optional as OptionalValidator
from wtforms.widgets import CheckboxInput, ListWidget

from .models import DEFAULT_STATUS, STATUS_CHOICES

# Allow a minimal set of tags in summaries
SUMMARY_TAGS = ['b', 'i', 'u', 'em', 'strong', 'p', 'br', 'ul', 'ol', 'li']
ALPHANUMERIC = r'^[A-Za-z0-9]+$'


def strip_text(value):
    return value.strip() if isinstance(value, str) else value


def sanitize_html(value):
    if value:
        return bleach.clean(value, tags=SUMMARY_TAGS, strip=True)
    return value


class ISODateField(DateField):
    """Date input accepting any ISO-8601 date or date-time string."""

    def __init__(self, label=None, validators=None, invalid_message="Invalid date", **kwargs):
        super().__init__(label, validators, format="%Y-%m-%d", **kwargs)
        self.invalid_message = invalid_message

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        raw = " ".join(valuelist).strip()
        if not raw:
            self.data = None
            return
        try:
            self.data = isoparse(raw).date()
        except (ValueError, OverflowError):
            self.data = None
            raise ValueError(self.invalid_message)


class AuthorForm(FlaskForm):
    first_name = StringField('First name', filters=[strip_text], validators=[
        DataRequired(message="First name must be specified."),
        Length(max=100, message="First name must be at most 100 characters."),
        Regexp(ALPHANUMERIC, message="First name has non-alphanumeric characters."),
    ])
    family_name = StringField('Family name', filters=[strip_text], validators=[
        DataRequired(message="Family name must be specified."),
        Length(max=100, message="Family name must be at most 100 characters."),
        Regexp(ALPHANUMERIC, message="Family name has non-alphanumeric characters."),
    ])
    date_of_birth = ISODateField('Date of birth', validators=[OptionalValidator()],
                                 invalid_message="Invalid date of birth")
    date_of_death = ISODateField('Date of death', validators=[OptionalValidator()],
                                 invalid_message="Invalid date of death")

    def record_fields(self):
        return {
            "first_name": self.first_name.data,
            "family_name": self.family_name.data,
            "date_of_birth": self.date_of_birth.data,
            "date_of_death": self.date_of_death.data,
        }


class GenreForm(FlaskForm):
    name = StringField('Genre', filters=[strip_text], validators=[
        DataRequired(message="Genre name required"),
        Length(min=3, max=100, message="Genre name must be between 3 and 100 characters."),
    ])

    def record_fields(self):
        return {"name": self.name.data}


class BookForm(FlaskForm):
    title = StringField('Title', filters=[strip_text], validators=[
        DataRequired(message="Title must not be empty."), Length(max=250)])
    author = SelectField('Author', coerce=int, validators=[
        InputRequired(message="Author must not be empty.")])
    summary = TextAreaField('Summary', filters=[strip_text, sanitize_html], validators=[
        DataRequired(message="Summary must not be empty.")])
    isbn = StringField('ISBN', filters=[strip_text], validators=[
        DataRequired(message="ISBN must not be empty"), Length(max=32)])
    genre = SelectMultipleField('Genre', coerce=int,
                                widget=ListWidget(prefix_label=False), option_widget=CheckboxInput())

    @staticmethod
    def initial_data(book):
        return {
            "title": book.title,
            "author": book.author_id,
            "summary": book.summary,
            "isbn": book.isbn,
            "genre": [g.id for g in book.genre],
        }

    def set_choices(self, authors, genres):
        # Only existing authors/genres validate, so references never dangle
        self.author.choices = [(a.id, a.name) for a in authors]
        self.genre.choices = [(g.id, g.name) for g in genres]

    def record_fields(self):
        """Cleaned values; ``genre`` holds ids for the view to resolve."""
        return {
            "title": self.title.data,
            "author_id": self.author.data,
            "summary": self.summary.data,
            "isbn": self.isbn.data,
            "genre": list(self.genre.data or []),
        }


class BookInstanceForm(FlaskForm):
    book = SelectField('Book', coerce=int, validators=[
        InputRequired(message="Book must be specified")])
    imprint = StringField('Imprint', filters=[strip_text], validators=[
        DataRequired(message="Imprint must be specified"), Length(max=200)])
    status = SelectField('Status', choices=[(s, s) for s in STATUS_CHOICES], default=DEFAULT_STATUS)
    due_back = ISODateField('Date when book available', validators=[OptionalValidator()],
                            invalid_message="Invalid date")

    @staticmethod
    def initial_data(copy):
        return {
            "book": copy.book_id,
            "imprint": copy.imprint,
            "status": copy.status,
            "due_back": copy.due_back,
        }

    def set_choices(self, books):
        self.book.choices = [(b.id, b.title) for b in books]

    def record_fields(self):
        return {
            "book_id": self.book.data,
            "imprint": self.imprint.data,
            "status": self.status.data,
            "due_back": self.due_back.data,
        }
