import pytest

from app import create_app
from config import TestingConfig
from models import db, Category
from services.library_state import LibraryStateTracker
from services.stats_service import StatisticsAggregator


@pytest.fixture
def app():
    # Fresh in-memory database for every test
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def tracker(session):
    return LibraryStateTracker(session)


@pytest.fixture
def aggregator(session):
    return StatisticsAggregator(session)


@pytest.fixture
def category(session):
    category = Category(name='EDEBIYAT', color='#3B82F6', description='Edebiyat ve yazın eserleri')
    session.add(category)
    session.commit()
    return category


@pytest.fixture
def make_book(tracker):
    def _make_book(title='Tutunamayanlar', first='Oğuz', last='Atay', **fields):
        return tracker.create_book(title=title, author_first_name=first, author_last_name=last, **fields)
    return _make_book
