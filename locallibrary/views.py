"""HTML views for the catalog, mounted under /catalog."""

import logging

from flask import Blueprint, current_app, flash, redirect, render_template_string, request, url_for

from . import templates
from .errors import HasDependentsError, RecordNotFoundError, StoreError
from .forms import AuthorForm, BookForm, BookInstanceForm, GenreForm
from .models import Author, Book, BookInstance, EntityKind, Genre

logger = logging.getLogger(__name__)

bp = Blueprint("catalog", __name__, url_prefix="/catalog")

STATUS_CLASSES = {
    "Available": "text-success",
    "Maintenance": "text-danger",
    "Loaned": "text-warning",
    "Reserved": "text-warning",
}


def get_repository():
    return current_app.extensions["locallibrary"]["repository"]


def get_integrity():
    return current_app.extensions["locallibrary"]["integrity"]


def render_page(body_template, active=None, title="Local Library", **context):
    nav = render_template_string(templates.NAV_HTML, active=active)
    body = render_template_string(body_template, title=title, **context)
    return render_template_string(templates.BASE_HTML, nav=nav, body=body, title=title)


@bp.app_context_processor
def inject_status_classes():
    return {"status_classes": STATUS_CLASSES}


# ----- Error pages -----
@bp.app_errorhandler(404)
def not_found(e):
    return render_page(templates.ERROR_PAGE, title="Not Found",
                       message="The page you requested does not exist."), 404


@bp.app_errorhandler(RecordNotFoundError)
def record_not_found(e):
    logger.info("Not found: %s", e)
    return render_page(templates.ERROR_PAGE, title="Not Found", message=e.message), 404


@bp.app_errorhandler(StoreError)
def store_error(e):
    logger.error("Request failed on a store error: %s", e)
    return render_page(templates.ERROR_PAGE, title="Error",
                       message="The catalog is unavailable right now. Please try again later."), 500


def _handle_delete(kind, record_id, id_field, list_endpoint, render_confirm):
    """Confirmation page on GET, guarded delete on POST.

    ``render_confirm(record, blockers)`` renders the confirmation page; it is
    shown again with the blockers when the delete is refused.
    """
    repo, integrity = get_repository(), get_integrity()

    if request.method == "POST":
        # The target id travels in the form body, not in the URL
        target_id = request.form.get(id_field, type=int)
        if target_id is None:
            return redirect(url_for(list_endpoint))
        try:
            integrity.delete(kind, target_id)
        except HasDependentsError as exc:
            try:
                record = repo.find_by_id(kind, target_id)
            except RecordNotFoundError:
                return redirect(url_for(list_endpoint))
            return render_confirm(record, exc.blockers)
        except RecordNotFoundError:
            logger.info("%s %s already gone, nothing to delete", kind.label, target_id)
        else:
            flash(f"{kind.label} deleted.", "success")
        return redirect(url_for(list_endpoint))

    try:
        record = repo.find_by_id(kind, record_id)
    except RecordNotFoundError:
        return redirect(url_for(list_endpoint))
    check = integrity.check_deletable(kind, record_id)
    return render_confirm(record, check.blockers)


# ----- Home -----
@bp.route("/")
def index():
    repo = get_repository()
    try:
        counts = {
            "books": repo.count(EntityKind.BOOK),
            "copies": repo.count(EntityKind.BOOK_INSTANCE),
            "copies_available": repo.count(EntityKind.BOOK_INSTANCE, status="Available"),
            "authors": repo.count(EntityKind.AUTHOR),
            "genres": repo.count(EntityKind.GENRE),
        }
        error = None
    except StoreError as exc:
        logger.error("Dashboard counts unavailable: %s", exc)
        counts, error = {}, exc
    return render_page(templates.INDEX, active="home", title="Local Library Home", counts=counts, error=error)


# ----- Authors -----
@bp.route("/authors")
def author_list():
    authors = get_repository().find_all(EntityKind.AUTHOR, sort="family_name")
    return render_page(templates.AUTHOR_LIST, active="authors", title="Author List", author_list=authors)


@bp.route("/author/<int:author_id>")
def author_detail(author_id):
    repo = get_repository()
    author = repo.find_by_id(EntityKind.AUTHOR, author_id)
    books = repo.find_by_relation(EntityKind.BOOK, "author", author_id)
    return render_page(templates.AUTHOR_DETAIL, active="authors", title="Author Detail",
                       author=author, author_books=books)


@bp.route("/author/create", methods=["GET", "POST"])
def author_create():
    form = AuthorForm()
    if form.validate_on_submit():
        author = get_repository().save(Author(**form.record_fields()))
        flash("Author created.", "success")
        return redirect(author.url)
    return render_page(templates.RECORD_FORM, active="authors", title="Create Author", form=form,
                       cancel_url=url_for("catalog.author_list"))


@bp.route("/author/<int:author_id>/update", methods=["GET", "POST"])
def author_update(author_id):
    repo = get_repository()
    author = repo.find_by_id(EntityKind.AUTHOR, author_id)
    form = AuthorForm(obj=author if request.method == "GET" else None)
    if form.validate_on_submit():
        author = repo.update(EntityKind.AUTHOR, author_id, form.record_fields())
        flash("Author updated.", "success")
        return redirect(author.url)
    return render_page(templates.RECORD_FORM, active="authors", title="Update Author", form=form,
                       cancel_url=author.url)


@bp.route("/author/<int:author_id>/delete", methods=["GET", "POST"])
def author_delete(author_id):
    def render_confirm(author, books):
        return render_page(templates.AUTHOR_DELETE, active="authors", title="Delete Author",
                           author=author, author_books=books)

    return _handle_delete(EntityKind.AUTHOR, author_id, "authorid", "catalog.author_list", render_confirm)


# ----- Genres -----
@bp.route("/genres")
def genre_list():
    genres = get_repository().find_all(EntityKind.GENRE, sort="name")
    return render_page(templates.GENRE_LIST, active="genres", title="Genre List", genre_list=genres)


@bp.route("/genre/<int:genre_id>")
def genre_detail(genre_id):
    repo = get_repository()
    genre = repo.find_by_id(EntityKind.GENRE, genre_id)
    books = repo.find_by_relation(EntityKind.BOOK, "genre", genre_id)
    return render_page(templates.GENRE_DETAIL, active="genres", title="Genre Detail",
                       genre=genre, genre_books=books)


@bp.route("/genre/create", methods=["GET", "POST"])
def genre_create():
    repo = get_repository()
    form = GenreForm()
    if form.validate_on_submit():
        # Same name already catalogued: show that one instead of a duplicate
        existing = repo.find_first(EntityKind.GENRE, name=form.name.data)
        if existing is not None:
            return redirect(existing.url)
        genre = repo.save(Genre(**form.record_fields()))
        flash("Genre created.", "success")
        return redirect(genre.url)
    return render_page(templates.RECORD_FORM, active="genres", title="Create Genre", form=form,
                       cancel_url=url_for("catalog.genre_list"))


@bp.route("/genre/<int:genre_id>/update", methods=["GET", "POST"])
def genre_update(genre_id):
    repo = get_repository()
    genre = repo.find_by_id(EntityKind.GENRE, genre_id)
    form = GenreForm(obj=genre if request.method == "GET" else None)
    if form.validate_on_submit():
        genre = repo.update(EntityKind.GENRE, genre_id, form.record_fields())
        flash("Genre updated.", "success")
        return redirect(genre.url)
    return render_page(templates.RECORD_FORM, active="genres", title="Update Genre", form=form,
                       cancel_url=genre.url)


@bp.route("/genre/<int:genre_id>/delete", methods=["GET", "POST"])
def genre_delete(genre_id):
    def render_confirm(genre, books):
        return render_page(templates.GENRE_DELETE, active="genres", title="Delete Genre",
                           genre=genre, genre_books=books)

    return _handle_delete(EntityKind.GENRE, genre_id, "genreid", "catalog.genre_list", render_confirm)


# ----- Books -----
def _book_form(repo, **kwargs):
    form = BookForm(**kwargs)
    form.set_choices(
        repo.find_all(EntityKind.AUTHOR, sort="family_name"),
        repo.find_all(EntityKind.GENRE, sort="name"),
    )
    return form


def _book_fields(repo, form):
    fields = form.record_fields()
    fields["genre"] = repo.find_many(EntityKind.GENRE, fields["genre"])
    return fields


@bp.route("/books")
def book_list():
    books = get_repository().find_all(EntityKind.BOOK, sort="title", populate=("author",))
    return render_page(templates.BOOK_LIST, active="books", title="Book List", book_list=books)


@bp.route("/book/<int:book_id>")
def book_detail(book_id):
    repo = get_repository()
    book = repo.find_by_id(EntityKind.BOOK, book_id, populate=("author", "genre"))
    copies = repo.find_by_relation(EntityKind.BOOK_INSTANCE, "book", book_id)
    return render_page(templates.BOOK_DETAIL, active="books", title=book.title,
                       book=book, book_instances=copies)


@bp.route("/book/create", methods=["GET", "POST"])
def book_create():
    repo = get_repository()
    form = _book_form(repo)
    if form.validate_on_submit():
        book = repo.save(Book(**_book_fields(repo, form)))
        flash("Book created.", "success")
        return redirect(book.url)
    return render_page(templates.RECORD_FORM, active="books", title="Create Book", form=form,
                       cancel_url=url_for("catalog.book_list"))


@bp.route("/book/<int:book_id>/update", methods=["GET", "POST"])
def book_update(book_id):
    repo = get_repository()
    book = repo.find_by_id(EntityKind.BOOK, book_id, populate=("genre",))
    if request.method == "GET":
        form = _book_form(repo, data=BookForm.initial_data(book))
    else:
        form = _book_form(repo)
    if form.validate_on_submit():
        book = repo.update(EntityKind.BOOK, book_id, _book_fields(repo, form))
        flash("Book updated.", "success")
        return redirect(book.url)
    return render_page(templates.RECORD_FORM, active="books", title="Update Book", form=form,
                       cancel_url=book.url)


@bp.route("/book/<int:book_id>/delete", methods=["GET", "POST"])
def book_delete(book_id):
    def render_confirm(book, copies):
        return render_page(templates.BOOK_DELETE, active="books", title="Delete Book",
                           book=book, book_instances=copies)

    return _handle_delete(EntityKind.BOOK, book_id, "bookid", "catalog.book_list", render_confirm)


# ----- Book instances -----
def _bookinstance_form(repo, **kwargs):
    form = BookInstanceForm(**kwargs)
    form.set_choices(repo.find_all(EntityKind.BOOK, sort="title"))
    return form


@bp.route("/bookinstances")
def bookinstance_list():
    copies = get_repository().find_all(EntityKind.BOOK_INSTANCE, sort="book_id", populate=("book",))
    return render_page(templates.BOOKINSTANCE_LIST, active="bookinstances", title="Book Instance List",
                       bookinstance_list=copies)


@bp.route("/bookinstance/<int:bookinstance_id>")
def bookinstance_detail(bookinstance_id):
    copy = get_repository().find_by_id(EntityKind.BOOK_INSTANCE, bookinstance_id, populate=("book",))
    return render_page(templates.BOOKINSTANCE_DETAIL, active="bookinstances",
                       title=f"Copy: {copy.book.title}", bookinstance=copy)


@bp.route("/bookinstance/create", methods=["GET", "POST"])
def bookinstance_create():
    repo = get_repository()
    form = _bookinstance_form(repo)
    if form.validate_on_submit():
        copy = repo.save(BookInstance(**form.record_fields()))
        flash("Book copy created.", "success")
        return redirect(copy.url)
    return render_page(templates.RECORD_FORM, active="bookinstances", title="Create BookInstance", form=form,
                       cancel_url=url_for("catalog.bookinstance_list"))


@bp.route("/bookinstance/<int:bookinstance_id>/update", methods=["GET", "POST"])
def bookinstance_update(bookinstance_id):
    repo = get_repository()
    copy = repo.find_by_id(EntityKind.BOOK_INSTANCE, bookinstance_id)
    if request.method == "GET":
        form = _bookinstance_form(repo, data=BookInstanceForm.initial_data(copy))
    else:
        form = _bookinstance_form(repo)
    if form.validate_on_submit():
        copy = repo.update(EntityKind.BOOK_INSTANCE, bookinstance_id, form.record_fields())
        flash("Book copy updated.", "success")
        return redirect(copy.url)
    return render_page(templates.RECORD_FORM, active="bookinstances", title="Update BookInstance", form=form,
                       cancel_url=copy.url)


@bp.route("/bookinstance/<int:bookinstance_id>/delete", methods=["GET", "POST"])
def bookinstance_delete(bookinstance_id):
    def render_confirm(copy, _blockers):
        return render_page(templates.BOOKINSTANCE_DELETE, active="bookinstances", title="Delete BookInstance",
                           bookinstance=copy)

    return _handle_delete(EntityKind.BOOK_INSTANCE, bookinstance_id, "bookinstanceid",
                          "catalog.bookinstance_list", render_confirm)
