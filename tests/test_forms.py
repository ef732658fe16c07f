from datetime import date

from werkzeug.datastructures import MultiDict

from locallibrary.forms import AuthorForm, BookForm, BookInstanceForm, GenreForm, sanitize_html


def test_sanitize_html_strips_disallowed_tags():
    cleaned = sanitize_html('<p>Fine <b>bold</b></p><script>alert("x")</script><img src=x>')
    assert cleaned.startswith("<p>Fine <b>bold</b></p>")
    assert "<script>" not in cleaned
    assert "<img" not in cleaned
    assert sanitize_html("") == ""


def test_author_form_trims_and_parses_dates(app):
    data = MultiDict({
        "first_name": "  Jane ", "family_name": "Austen",
        "date_of_birth": "1775-12-16T00:00:00", "date_of_death": "",
    })
    with app.test_request_context(method="POST", data=data):
        form = AuthorForm()
        assert form.validate()
        assert form.record_fields() == {
            "first_name": "Jane",
            "family_name": "Austen",
            "date_of_birth": date(1775, 12, 16),
            "date_of_death": None,
        }


def test_author_form_reports_bad_dates(app):
    data = MultiDict({"first_name": "Jane", "family_name": "Austen",
                      "date_of_birth": "16/12/1775", "date_of_death": "yesterday"})
    with app.test_request_context(method="POST", data=data):
        form = AuthorForm()
        assert not form.validate()
        assert form.errors["date_of_birth"] == ["Invalid date of birth"]
        assert form.errors["date_of_death"] == ["Invalid date of death"]


def test_author_form_rejects_long_names(app):
    data = MultiDict({"first_name": "J" * 101, "family_name": "Austen"})
    with app.test_request_context(method="POST", data=data):
        form = AuthorForm()
        assert not form.validate()
        assert "First name must be at most 100 characters." in form.errors["first_name"]


def test_genre_form_length_bounds(app):
    for name, ok in [("Sci", True), ("Sf", False), ("x" * 100, True), ("x" * 101, False)]:
        with app.test_request_context(method="POST", data={"name": name}):
            assert GenreForm().validate() is ok


def test_book_form_only_accepts_known_choices(app, factory):
    with app.app_context():
        author = factory.author()
        genre = factory.genre()
        data = MultiDict([
            ("title", " Emma "), ("author", str(author.id)), ("summary", "<i>Matchmaking</i>"),
            ("isbn", "9780141439587"), ("genre", str(genre.id)),
        ])
        with app.test_request_context(method="POST", data=data):
            form = BookForm()
            form.set_choices([author], [genre])
            assert form.validate()
            assert form.record_fields() == {
                "title": "Emma",
                "author_id": author.id,
                "summary": "<i>Matchmaking</i>",
                "isbn": "9780141439587",
                "genre": [genre.id],
            }

        data["genre"] = "999"
        with app.test_request_context(method="POST", data=data):
            form = BookForm()
            form.set_choices([author], [genre])
            assert not form.validate()
            assert "genre" in form.errors


def test_bookinstance_form_rejects_unknown_status(app, factory):
    with app.app_context():
        book = factory.book(factory.author())
        data = {"book": str(book.id), "imprint": "1st ed.", "status": "Lost"}
        with app.test_request_context(method="POST", data=data):
            form = BookInstanceForm()
            form.set_choices([book])
            assert not form.validate()
            assert list(form.errors) == ["status"]
