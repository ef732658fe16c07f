from datetime import date

import click
from flask import current_app
from flask.cli import with_appcontext

from .models import Author, Book, BookInstance, EntityKind, Genre, db


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Initialize the database and add sample data (for dev only)."""
    db.create_all()
    repo = current_app.extensions["locallibrary"]["repository"]
    if repo.count(EntityKind.AUTHOR):
        click.echo("DB already initialized.")
        return

    austen = repo.save(Author(first_name="Jane", family_name="Austen",
                              date_of_birth=date(1775, 12, 16), date_of_death=date(1817, 7, 18)))
    asimov = repo.save(Author(first_name="Isaac", family_name="Asimov",
                              date_of_birth=date(1920, 1, 2), date_of_death=date(1992, 4, 6)))
    fiction = repo.save(Genre(name="Fiction"))
    scifi = repo.save(Genre(name="Science Fiction"))

    emma = repo.save(Book(title="Emma", author=austen, isbn="9780141439587", genre=[fiction],
                          summary="A young woman meddles in the romantic lives of her neighbours."))
    pride = repo.save(Book(title="Pride and Prejudice", author=austen, isbn="9780141439518", genre=[fiction],
                           summary="Elizabeth Bennet and Mr Darcy overcome first impressions."))
    foundation = repo.save(Book(title="Foundation", author=asimov, isbn="9780553293357",
                                genre=[fiction, scifi],
                                summary="A mathematician plans for the fall of a galactic empire."))

    repo.save(BookInstance(book=emma, imprint="Penguin Classics, 2003", status="Available"))
    repo.save(BookInstance(book=pride, imprint="Penguin Classics, 2002", status="Loaned",
                           due_back=date(2026, 11, 1)))
    repo.save(BookInstance(book=foundation, imprint="Bantam Spectra, 1991"))
    click.echo("Initialized DB with sample data.")


def register_commands(app):
    app.cli.add_command(init_db_command)
