import logging
import os
import time

from flask import Flask, jsonify, request
from flask_migrate import Migrate
from flask_wtf.csrf import CSRFProtect
from werkzeug.exceptions import HTTPException

from config import Config
from models import db
from services.errors import LibraryError

logger = logging.getLogger(__name__)

migrate = Migrate()
csrf = CSRFProtect()


def register_error_handlers(app):
    """Every failure leaves the API as a JSON body with a matching status."""

    @app.errorhandler(LibraryError)
    def handle_library_error(error):
        logger.warning(f"{request.method} {request.path} rejected ({error.status_code}): {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if error.code == 404 and request.url_rule is None:
            message = 'Route not found'
        else:
            message = error.description
        return jsonify({'error': message}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.error(f"Unhandled error on {request.method} {request.path}: {error}", exc_info=True)
        db.session.rollback()
        body = {'error': 'Something went wrong!'}
        if app.debug:
            body['message'] = str(error)
        return jsonify(body), 500


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config['STARTED_AT'] = time.time()

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    app.json.sort_keys = False
    app.url_map.strict_slashes = False

    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)

    from routes import main, books, categories, sub_categories, authors, reading_history, \
        wishlist, borrowed, currently_reading, stats
    app.register_blueprint(main.bp)
    app.register_blueprint(books.bp)
    app.register_blueprint(categories.bp)
    app.register_blueprint(sub_categories.bp)
    app.register_blueprint(authors.bp)
    app.register_blueprint(reading_history.bp)
    app.register_blueprint(wishlist.bp)
    app.register_blueprint(borrowed.bp)
    app.register_blueprint(currently_reading.bp)
    app.register_blueprint(stats.bp)

    os.makedirs(app.config['DATA_FOLDER'], exist_ok=True)

    register_error_handlers(app)

    # Register CLI commands
    from cli_commands import register_commands
    register_commands(app)

    return app


if __name__ == '__main__':
    create_app().run(debug=True)
