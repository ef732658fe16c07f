from . import create_app


def main():
    app = create_app()
    try:
        app.run(debug=True)
    finally:
        with app.app_context():
            app.extensions["locallibrary"]["repository"].close()


if __name__ == "__main__":
    main()
