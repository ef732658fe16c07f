"""Page templates, rendered with ``render_template_string``.

Every page is a body template rendered into BASE_HTML together with the
navigation bar.
"""

NAV_HTML = """
<nav class="navbar navbar-expand-lg navbar-light bg-light mb-3">
  <div class="container-fluid">
    <a class="navbar-brand" href="{{ url_for('catalog.index') }}">Local Library</a>
    <div class="collapse navbar-collapse">
      <ul class="navbar-nav me-auto mb-2 mb-lg-0">
        <li class="nav-item"><a class="nav-link {% if active=='home' %}active{% endif %}" href="{{ url_for('catalog.index') }}">Home</a></li>
        <li class="nav-item"><a class="nav-link {% if active=='books' %}active{% endif %}" href="{{ url_for('catalog.book_list') }}">All books</a></li>
        <li class="nav-item"><a class="nav-link {% if active=='authors' %}active{% endif %}" href="{{ url_for('catalog.author_list') }}">All authors</a></li>
        <li class="nav-item"><a class="nav-link {% if active=='genres' %}active{% endif %}" href="{{ url_for('catalog.genre_list') }}">All genres</a></li>
        <li class="nav-item"><a class="nav-link {% if active=='bookinstances' %}active{% endif %}" href="{{ url_for('catalog.bookinstance_list') }}">All book-instances</a></li>
      </ul>
      <ul class="navbar-nav">
        <li class="nav-item"><a class="nav-link" href="{{ url_for('catalog.author_create') }}">Create new author</a></li>
        <li class="nav-item"><a class="nav-link" href="{{ url_for('catalog.genre_create') }}">Create new genre</a></li>
        <li class="nav-item"><a class="nav-link" href="{{ url_for('catalog.book_create') }}">Create new book</a></li>
        <li class="nav-item"><a class="nav-link" href="{{ url_for('catalog.bookinstance_create') }}">Create new book instance (copy)</a></li>
      </ul>
    </div>
  </div>
</nav>
"""

BASE_HTML = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{{ title }}</title>
    <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css" rel="stylesheet">
    <style>
      .small-muted { font-size: 0.9rem; color: #6c757d; }
      .text-success, .text-danger, .text-warning { font-weight: 600; }
    </style>
  </head>
  <body class="bg-light">
    <div class="container py-4">
      {{ nav|safe }}
      <div class="card shadow-sm p-3">
        {% with messages = get_flashed_messages(with_categories=true) %}
          {% if messages %}
            {% for cat, msg in messages %}
              <div class="alert alert-{{cat}}" role="alert">{{ msg }}</div>
            {% endfor %}
          {% endif %}
        {% endwith %}
        {{ body|safe }}
      </div>
    </div>
  </body>
</html>
"""

ERROR_PAGE = """
<h1>{{ title }}</h1>
<p>{{ message }}</p>
<a class="btn btn-secondary" href="{{ url_for('catalog.index') }}">Back to the catalog</a>
"""

INDEX = """
<h1>{{ title }}</h1>
<p>Welcome to <em>LocalLibrary</em>, a very basic catalog of books, authors, genres and copies.</p>
<h2>Dynamic content</h2>
{% if error %}
  <p class="text-danger">Error getting dynamic content.</p>
{% else %}
  <p>The library has the following record counts:</p>
  <ul>
    <li><strong>Books:</strong> {{ counts.books }}</li>
    <li><strong>Copies:</strong> {{ counts.copies }}</li>
    <li><strong>Copies available:</strong> {{ counts.copies_available }}</li>
    <li><strong>Authors:</strong> {{ counts.authors }}</li>
    <li><strong>Genres:</strong> {{ counts.genres }}</li>
  </ul>
{% endif %}
"""

# Shared by all four create/update pages
RECORD_FORM = """
<h1>{{ title }}</h1>
<form method="post" novalidate>
  {{ form.hidden_tag() }}
  {% for field in form if field.widget.input_type != 'hidden' %}
    <div class="mb-3">
      {{ field.label(class_="form-label") }}
      {% if field.type == 'SelectMultipleField' %}
        {{ field(class_="list-unstyled") }}
      {% else %}
        {{ field(class_="form-control") }}
      {% endif %}
    </div>
  {% endfor %}
  <button class="btn btn-primary" type="submit">Submit</button>
  <a class="btn btn-light" href="{{ cancel_url }}">Back</a>
</form>
{% if form.errors %}
  <ul class="mt-3">
    {% for field_errors in form.errors.values() %}
      {% for e in field_errors %}<li class="text-danger small">{{ e }}</li>{% endfor %}
    {% endfor %}
  </ul>
{% endif %}
"""

# ----- Authors -----
AUTHOR_LIST = """
<h1>{{ title }}</h1>
<ul>
{% for author in author_list %}
  <li><a href="{{ author.url }}">{{ author.name }}</a> ({{ author.lifespan }})</li>
{% else %}
  <li>There are no authors.</li>
{% endfor %}
</ul>
"""

AUTHOR_DETAIL = """
<h1>Author: {{ author.name }}</h1>
<p>{{ author.lifespan }}</p>
<div class="ms-3">
  <h4>Books</h4>
  <dl>
  {% for book in author_books %}
    <dt><a href="{{ book.url }}">{{ book.title }}</a></dt>
    <dd>{{ book.summary|safe }}</dd>
  {% else %}
    <p>This author has no books.</p>
  {% endfor %}
  </dl>
</div>
<hr>
<a class="btn btn-sm btn-outline-primary" href="{{ url_for('catalog.author_update', author_id=author.id) }}">Update author</a>
<a class="btn btn-sm btn-outline-danger" href="{{ url_for('catalog.author_delete', author_id=author.id) }}">Delete author</a>
"""

AUTHOR_DELETE = """
<h1>{{ title }}: {{ author.name }}</h1>
<p>{{ author.lifespan }}</p>
{% if author_books %}
  <p><strong>Delete the following books before attempting to delete this author.</strong></p>
  <div class="ms-3">
    <h4>Books</h4>
    <dl>
    {% for book in author_books %}
      <dt><a href="{{ book.url }}">{{ book.title }}</a></dt>
      <dd>{{ book.summary|safe }}</dd>
    {% endfor %}
    </dl>
  </div>
{% else %}
  <p>Do you really want to delete this Author?</p>
  <form method="post">
    <input type="hidden" name="csrf_token" value="{{ csrf_token() }}">
    <input type="hidden" name="authorid" value="{{ author.id }}">
    <button class="btn btn-danger" type="submit">Delete</button>
  </form>
{% endif %}
"""

# ----- Genres -----
GENRE_LIST = """
<h1>{{ title }}</h1>
<ul>
{% for genre in genre_list %}
  <li><a href="{{ genre.url }}">{{ genre.name }}</a></li>
{% else %}
  <li>There are no genres.</li>
{% endfor %}
</ul>
"""

GENRE_DETAIL = """
<h1>Genre: {{ genre.name }}</h1>
<div class="ms-3">
  <h4>Books</h4>
  <dl>
  {% for book in genre_books %}
    <dt><a href="{{ book.url }}">{{ book.title }}</a></dt>
    <dd>{{ book.summary|safe }}</dd>
  {% else %}
    <p>This genre has no books.</p>
  {% endfor %}
  </dl>
</div>
<hr>
<a class="btn btn-sm btn-outline-primary" href="{{ url_for('catalog.genre_update', genre_id=genre.id) }}">Update genre</a>
<a class="btn btn-sm btn-outline-danger" href="{{ url_for('catalog.genre_delete', genre_id=genre.id) }}">Delete genre</a>
"""

GENRE_DELETE = """
<h1>{{ title }}: {{ genre.name }}</h1>
{% if genre_books %}
  <p><strong>Delete the following books before attempting to delete this genre.</strong></p>
  <div class="ms-3">
    <h4>Books</h4>
    <dl>
    {% for book in genre_books %}
      <dt><a href="{{ book.url }}">{{ book.title }}</a></dt>
      <dd>{{ book.summary|safe }}</dd>
    {% endfor %}
    </dl>
  </div>
{% else %}
  <p>Do you really want to delete this Genre?</p>
  <form method="post">
    <input type="hidden" name="csrf_token" value="{{ csrf_token() }}">
    <input type="hidden" name="genreid" value="{{ genre.id }}">
    <button class="btn btn-danger" type="submit">Delete</button>
  </form>
{% endif %}
"""

# ----- Books -----
BOOK_LIST = """
<h1>{{ title }}</h1>
<ul>
{% for book in book_list %}
  <li><a href="{{ book.url }}">{{ book.title }}</a> ({{ book.author.name }})</li>
{% else %}
  <li>There are no books.</li>
{% endfor %}
</ul>
"""

BOOK_DETAIL = """
<h1>Title: {{ book.title }}</h1>
<p><strong>Author:</strong> <a href="{{ book.author.url }}">{{ book.author.name }}</a></p>
<p><strong>Summary:</strong> {{ book.summary|safe }}</p>
<p><strong>ISBN:</strong> {{ book.isbn }}</p>
<p><strong>Genre:</strong>
  {% for genre in book.genre %}<a href="{{ genre.url }}">{{ genre.name }}</a>{% if not loop.last %}, {% endif %}{% endfor %}
</p>
<div class="ms-3">
  <h4>Copies</h4>
  {% for copy in book_instances %}
    <hr>
    <p class="{{ status_classes[copy.status] }}">{{ copy.status }}</p>
    {% if copy.status != 'Available' %}<p><strong>Due back:</strong> {{ copy.due_back_formatted }}</p>{% endif %}
    <p><strong>Imprint:</strong> {{ copy.imprint }}</p>
    <p><strong>Id:</strong> <a href="{{ copy.url }}">{{ copy.id }}</a></p>
  {% else %}
    <p>There are no copies of this book in the library.</p>
  {% endfor %}
</div>
<hr>
<a class="btn btn-sm btn-outline-primary" href="{{ url_for('catalog.book_update', book_id=book.id) }}">Update book</a>
<a class="btn btn-sm btn-outline-danger" href="{{ url_for('catalog.book_delete', book_id=book.id) }}">Delete book</a>
"""

BOOK_DELETE = """
<h1>{{ title }}: {{ book.title }}</h1>
<p><strong>Author:</strong> {{ book.author.name }}</p>
{% if book_instances %}
  <p><strong>Delete the following copies before attempting to delete this book.</strong></p>
  <div class="ms-3">
    <h4>Copies</h4>
    {% for copy in book_instances %}
      <hr>
      <p class="{{ status_classes[copy.status] }}">{{ copy.status }}</p>
      <p><strong>Imprint:</strong> {{ copy.imprint }}</p>
      <p><strong>Id:</strong> <a href="{{ copy.url }}">{{ copy.id }}</a></p>
    {% endfor %}
  </div>
{% else %}
  <p>Do you really want to delete this Book?</p>
  <form method="post">
    <input type="hidden" name="csrf_token" value="{{ csrf_token() }}">
    <input type="hidden" name="bookid" value="{{ book.id }}">
    <button class="btn btn-danger" type="submit">Delete</button>
  </form>
{% endif %}
"""

# ----- Book instances -----
BOOKINSTANCE_LIST = """
<h1>{{ title }}</h1>
<ul>
{% for copy in bookinstance_list %}
  <li>
    <a href="{{ copy.url }}">{{ copy.book.title }} : {{ copy.imprint }}</a> -
    <span class="{{ status_classes[copy.status] }}">{{ copy.status }}</span>
    {% if copy.status != 'Available' %}<span> (Due: {{ copy.due_back_formatted }})</span>{% endif %}
  </li>
{% else %}
  <li>There are no book copies in this library.</li>
{% endfor %}
</ul>
"""

BOOKINSTANCE_DETAIL = """
<h1>ID: {{ bookinstance.id }}</h1>
<p><strong>Title:</strong> <a href="{{ bookinstance.book.url }}">{{ bookinstance.book.title }}</a></p>
<p><strong>Imprint:</strong> {{ bookinstance.imprint }}</p>
<p><strong>Status:</strong> <span class="{{ status_classes[bookinstance.status] }}">{{ bookinstance.status }}</span></p>
{% if bookinstance.status != 'Available' %}<p><strong>Due back:</strong> {{ bookinstance.due_back_formatted }}</p>{% endif %}
<hr>
<a class="btn btn-sm btn-outline-primary" href="{{ url_for('catalog.bookinstance_update', bookinstance_id=bookinstance.id) }}">Update copy</a>
<a class="btn btn-sm btn-outline-danger" href="{{ url_for('catalog.bookinstance_delete', bookinstance_id=bookinstance.id) }}">Delete copy</a>
"""

BOOKINSTANCE_DELETE = """
<h1>{{ title }}</h1>
<p><strong>Title:</strong> <a href="{{ bookinstance.book.url }}">{{ bookinstance.book.title }}</a></p>
<p><strong>Imprint:</strong> {{ bookinstance.imprint }}</p>
<p><strong>Status:</strong> {{ bookinstance.status }}</p>
<p>Do you really want to delete this copy?</p>
<form method="post">
  <input type="hidden" name="csrf_token" value="{{ csrf_token() }}">
  <input type="hidden" name="bookinstanceid" value="{{ bookinstance.id }}">
  <button class="btn btn-danger" type="submit">Delete</button>
</form>
"""
