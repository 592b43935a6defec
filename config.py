import os
from pathlib import Path

basedir = Path(__file__).parent.absolute()


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f'sqlite:///{basedir / "data" / "library.db"}'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JSON API only, forms are fed from request bodies
    WTF_CSRF_ENABLED = False

    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    DATA_FOLDER = basedir / 'data'

    BOOKS_PER_PAGE = 50
    MAX_BOOKS_PER_PAGE = 200
    HISTORY_PER_PAGE = 20
    TOP_AUTHORS_LIMIT = 10
    RECENT_ACTIVITY_LIMIT = 5

    # Borrowed books older than this are reported as overdue
    OVERDUE_AFTER_DAYS = 60
    # Trailing window used by the achievements "current streak"
    STREAK_WINDOW_DAYS = 30

    # Bulk import settings
    IMPORT_DEFAULT_RATING = 4


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    LOG_LEVEL = 'WARNING'
