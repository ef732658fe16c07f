import enum

from flask import url_for
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

STATUS_CHOICES = ("Available", "Maintenance", "Loaned", "Reserved")
DEFAULT_STATUS = "Maintenance"


def format_date(value):
    """Medium date like "Dec 16, 1775"; empty string for None."""
    if not value:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


# Book <-> Genre membership. Rows go away with their book; genres are never
# removed through here.
book_genres = db.Table(
    'book_genres',
    db.Column('book_id', db.Integer, db.ForeignKey('books.id'), primary_key=True),
    db.Column('genre_id', db.Integer, db.ForeignKey('genres.id'), primary_key=True),
)


class Author(db.Model):
    __tablename__ = 'authors'
    FIELDS = ('first_name', 'family_name', 'date_of_birth', 'date_of_death')

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    family_name = db.Column(db.String(100), nullable=False, index=True)
    date_of_birth = db.Column(db.Date)
    date_of_death = db.Column(db.Date)

    books = db.relationship('Book', back_populates='author', order_by='Book.title')

    @property
    def name(self):
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self):
        return f"{format_date(self.date_of_birth)} - {format_date(self.date_of_death)}"

    @property
    def url(self):
        return url_for('catalog.author_detail', author_id=self.id)

    def __repr__(self):
        return f"Author(id = {self.id}, name = {self.name})"


class Genre(db.Model):
    __tablename__ = 'genres'
    FIELDS = ('name',)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, index=True)

    books = db.relationship('Book', secondary=book_genres, back_populates='genre', order_by='Book.title')

    @property
    def url(self):
        return url_for('catalog.genre_detail', genre_id=self.id)

    def __repr__(self):
        return f"Genre(id = {self.id}, name = {self.name})"


class Book(db.Model):
    __tablename__ = 'books'
    FIELDS = ('title', 'author_id', 'summary', 'isbn', 'genre')

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(250), nullable=False, index=True)
    author_id = db.Column(db.Integer, db.ForeignKey('authors.id'), nullable=False)
    summary = db.Column(db.Text, nullable=False)
    isbn = db.Column(db.String(32), nullable=False)

    author = db.relationship('Author', back_populates='books')
    genre = db.relationship('Genre', secondary=book_genres, back_populates='books', order_by='Genre.name')
    instances = db.relationship('BookInstance', back_populates='book', order_by='BookInstance.id')

    @property
    def url(self):
        return url_for('catalog.book_detail', book_id=self.id)

    def __repr__(self):
        return f"Book(id = {self.id}, title = {self.title})"


class BookInstance(db.Model):
    __tablename__ = 'book_instances'
    FIELDS = ('book_id', 'imprint', 'status', 'due_back')

    id = db.Column(db.Integer, primary_key=True)
    book_id = db.Column(db.Integer, db.ForeignKey('books.id'), nullable=False, index=True)
    imprint = db.Column(db.String(200), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=DEFAULT_STATUS, index=True)
    # Only meaningful while the copy is Loaned or Reserved; nothing enforces that.
    due_back = db.Column(db.Date)

    book = db.relationship('Book', back_populates='instances')

    @property
    def due_back_formatted(self):
        return format_date(self.due_back)

    @property
    def url(self):
        return url_for('catalog.bookinstance_detail', bookinstance_id=self.id)

    def __repr__(self):
        return f"BookInstance(id = {self.id}, book_id = {self.book_id}, status = {self.status})"


class EntityKind(enum.Enum):
    AUTHOR = "author"
    BOOK = "book"
    GENRE = "genre"
    BOOK_INSTANCE = "bookinstance"

    @property
    def model(self):
        return _MODELS[self]

    @property
    def label(self):
        return _LABELS[self]

    @classmethod
    def of(cls, entity):
        for kind, model in _MODELS.items():
            if isinstance(entity, model):
                return kind
        raise TypeError(f"Not a catalog record: {entity!r}")


_MODELS = {
    EntityKind.AUTHOR: Author,
    EntityKind.BOOK: Book,
    EntityKind.GENRE: Genre,
    EntityKind.BOOK_INSTANCE: BookInstance,
}

_LABELS = {
    EntityKind.AUTHOR: "Author",
    EntityKind.BOOK: "Book",
    EntityKind.GENRE: "Genre",
    EntityKind.BOOK_INSTANCE: "Book copy",
}
