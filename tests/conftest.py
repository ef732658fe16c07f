"""Shared pytest fixtures for the catalog test suite."""

from datetime import date

import pytest

from locallibrary import create_app
from locallibrary.config import TestingConfig
from locallibrary.models import Author, Book, BookInstance, Genre, db


# ---------------------------------------------------------------------------
# Application fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def app():
    """A fresh app on its own in-memory SQLite database, CSRF off."""
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.drop_all()
        app.extensions["locallibrary"]["repository"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def repo(app):
    return app.extensions["locallibrary"]["repository"]


@pytest.fixture
def integrity(app):
    return app.extensions["locallibrary"]["integrity"]


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

class CatalogFactory:
    """Creates records through the repository, the way the views do."""

    def __init__(self, repo):
        self.repo = repo

    def author(self, first_name="Jane", family_name="Austen", **kwargs):
        return self.repo.save(Author(first_name=first_name, family_name=family_name, **kwargs))

    def genre(self, name="Fiction"):
        return self.repo.save(Genre(name=name))

    def book(self, author, title="Emma", genres=(), summary="A novel about youthful hubris.",
             isbn="9780141439587"):
        return self.repo.save(Book(title=title, author=author, summary=summary, isbn=isbn,
                                   genre=list(genres)))

    def copy(self, book, imprint="2020 ed.", status="Available", due_back=None):
        return self.repo.save(BookInstance(book=book, imprint=imprint, status=status, due_back=due_back))


@pytest.fixture
def factory(repo):
    return CatalogFactory(repo)


@pytest.fixture
def seeded(app, factory):
    """Austen with "Emma" (one available copy), plus an unused genre and author.

    Returns plain ids so tests can use them outside the app context.
    """
    with app.app_context():
        austen = factory.author(date_of_birth=date(1775, 12, 16), date_of_death=date(1817, 7, 18))
        loner = factory.author(first_name="Ben", family_name="Bova")
        fiction = factory.genre("Fiction")
        poetry = factory.genre("Poetry")
        emma = factory.book(austen, genres=[fiction])
        copy = factory.copy(emma)
        return {
            "austen": austen.id,
            "bova": loner.id,
            "fiction": fiction.id,
            "poetry": poetry.id,
            "emma": emma.id,
            "copy": copy.id,
        }
