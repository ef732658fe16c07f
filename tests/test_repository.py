from datetime import date

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from locallibrary.errors import RecordNotFoundError, StoreError
from locallibrary.models import Author, EntityKind

pytestmark = pytest.mark.usefixtures("app_ctx")


def test_save_assigns_identifier(repo):
    author = repo.save(Author(first_name="Jane", family_name="Austen"))
    assert isinstance(author.id, int)
    assert repo.find_by_id(EntityKind.AUTHOR, author.id) is author


def test_find_all_insertion_order_by_default(repo, factory):
    factory.genre("Poetry")
    factory.genre("Fantasy")
    factory.genre("Horror")
    assert [g.name for g in repo.find_all(EntityKind.GENRE)] == ["Poetry", "Fantasy", "Horror"]


def test_find_all_sorted_ascending(repo, factory):
    factory.author("Isaac", "Asimov")
    factory.author("Ben", "Bova")
    factory.author("Jane", "Austen")
    names = [a.family_name for a in repo.find_all(EntityKind.AUTHOR, sort="family_name")]
    assert names == ["Asimov", "Austen", "Bova"]


def test_find_all_populates_relations(repo, factory):
    factory.book(factory.author(), title="Emma")
    books = repo.find_all(EntityKind.BOOK, sort="title", populate=("author",))
    assert books[0].author.name == "Austen, Jane"


def test_find_by_id_missing_raises(repo):
    with pytest.raises(RecordNotFoundError) as excinfo:
        repo.find_by_id(EntityKind.BOOK, 42)
    assert excinfo.value.kind is EntityKind.BOOK
    assert excinfo.value.record_id == 42
    assert "Book not found" in str(excinfo.value)


def test_find_by_relation_single_reference(repo, factory):
    austen = factory.author()
    asimov = factory.author("Isaac", "Asimov")
    emma = factory.book(austen, title="Emma")
    pride = factory.book(austen, title="Pride and Prejudice")
    factory.book(asimov, title="Foundation")

    assert repo.find_by_relation(EntityKind.BOOK, "author", austen.id) == [emma, pride]


def test_find_by_relation_set_membership(repo, factory):
    author = factory.author()
    fiction = factory.genre("Fiction")
    scifi = factory.genre("Science Fiction")
    emma = factory.book(author, title="Emma", genres=[fiction])
    foundation = factory.book(author, title="Foundation", genres=[fiction, scifi])

    assert repo.find_by_relation(EntityKind.BOOK, "genre", fiction.id) == [emma, foundation]
    assert repo.find_by_relation(EntityKind.BOOK, "genre", scifi.id) == [foundation]


def test_find_by_relation_book_copies(repo, factory):
    book = factory.book(factory.author())
    first = factory.copy(book, imprint="1st")
    second = factory.copy(book, imprint="2nd")
    assert repo.find_by_relation(EntityKind.BOOK_INSTANCE, "book", book.id) == [first, second]
    assert repo.find_by_relation(EntityKind.BOOK_INSTANCE, "book", book.id + 1) == []


def test_find_many_skips_unknown_ids(repo, factory):
    fiction = factory.genre("Fiction")
    poetry = factory.genre("Poetry")
    assert repo.find_many(EntityKind.GENRE, [poetry.id, 999, fiction.id]) == [fiction, poetry]
    assert repo.find_many(EntityKind.GENRE, []) == []


def test_find_first_exact_match(repo, factory):
    fiction = factory.genre("Fiction")
    assert repo.find_first(EntityKind.GENRE, name="Fiction") is fiction
    assert repo.find_first(EntityKind.GENRE, name="fiction") is None


def test_count_with_criteria(repo, factory):
    book = factory.book(factory.author())
    factory.copy(book, status="Available")
    factory.copy(book, status="Loaned", due_back=date(2026, 11, 1))
    factory.copy(book, status="Available")
    assert repo.count(EntityKind.BOOK_INSTANCE) == 3
    assert repo.count(EntityKind.BOOK_INSTANCE, status="Available") == 2


def test_update_replaces_every_field(repo, factory):
    author = factory.author(date_of_birth=date(1775, 12, 16), date_of_death=date(1817, 7, 18))

    updated = repo.update(EntityKind.AUTHOR, author.id, {"first_name": "J", "family_name": "Austen"})

    assert updated.first_name == "J"
    assert updated.date_of_birth is None
    assert updated.date_of_death is None


def test_update_resets_genre_set(repo, factory):
    author = factory.author()
    fiction = factory.genre("Fiction")
    book = factory.book(author, genres=[fiction])

    repo.update(EntityKind.BOOK, book.id, {
        "title": "Emma", "author_id": author.id, "summary": "s", "isbn": "1",
    })

    assert repo.find_by_id(EntityKind.BOOK, book.id).genre == []
    assert repo.find_by_relation(EntityKind.BOOK, "genre", fiction.id) == []


def test_update_missing_record_raises(repo):
    with pytest.raises(RecordNotFoundError):
        repo.update(EntityKind.GENRE, 7, {"name": "Fiction"})


def test_delete_by_id(repo, factory):
    genre = factory.genre()
    genre_id = genre.id
    repo.delete_by_id(EntityKind.GENRE, genre_id)
    with pytest.raises(RecordNotFoundError):
        repo.find_by_id(EntityKind.GENRE, genre_id)
    with pytest.raises(RecordNotFoundError):
        repo.delete_by_id(EntityKind.GENRE, genre_id)


def test_store_failure_is_rolled_back_and_wrapped(repo, monkeypatch, caplog):
    def broken_commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "commit", broken_commit)

    with pytest.raises(StoreError) as excinfo:
        repo.save(Author(first_name="Jane", family_name="Austen"))

    assert isinstance(excinfo.value.__cause__, OperationalError)
    assert excinfo.value.details == {"kind": "author"}
    assert "Store failure during save on author" in caplog.text
    monkeypatch.undo()
    assert repo.count(EntityKind.AUTHOR) == 0
