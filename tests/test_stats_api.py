from datetime import datetime


def test_stats_on_empty_library(client):
    body = client.get('/api/stats').get_json()

    assert body['overview']['total_books'] == 0
    assert body['overview']['reading_percentage'] == 0
    assert body['recent_activity'] == []


def test_stats_overview(client, make_book, tracker):
    read = make_book('Tutunamayanlar')
    make_book('Tehlikeli Oyunlar')
    tracker.mark_as_read(read.id, rating=5)

    body = client.get('/api/stats').get_json()

    assert body['overview']['total_books'] == 2
    assert body['overview']['read_books'] == 1
    assert body['overview']['reading_percentage'] == 50
    assert body['recent_activity'][0]['title'] == 'Tutunamayanlar'


def test_reading_progress_endpoint(client, make_book, tracker):
    book = make_book()
    tracker.mark_as_read(book.id, finish_date=datetime(2023, 7, 4))

    body = client.get('/api/stats/reading-progress?year=2023').get_json()

    assert body['year'] == 2023
    assert len(body['monthly_data']) == 12
    assert body['monthly_data'][6] == {'month': 7, 'books_read': 1}


def test_reading_progress_defaults_to_current_year(client):
    body = client.get('/api/stats/reading-progress').get_json()
    assert body['year'] == datetime.now().year
    assert len(body['monthly_data']) == 12


def test_top_authors_endpoint(client, make_book):
    for title in ('Bir', 'İki', 'Üç'):
        make_book(title, 'Jane', 'Doe')
    make_book('Dört', 'John', 'Smith')

    authors = client.get('/api/stats/top-authors?limit=1').get_json()

    assert len(authors) == 1
    assert authors[0]['name'] == 'Jane Doe'
    assert authors[0]['book_count'] == 3


def test_achievements_endpoint(client, make_book, tracker):
    book = make_book()
    tracker.mark_as_read(book.id, rating=4)
    tracker.mark_as_read(book.id, rating=5)

    body = client.get('/api/stats/achievements').get_json()

    assert body['current_streak'] == 2
    assert body['longest_streak'] == 2
    assert body['total_reading_days'] == 1
    assert body['average_rating'] == 4.5


def test_category_distribution_endpoint(client, category, make_book):
    make_book(category_id=category.id, sub_category='ROMAN')

    body = client.get('/api/stats/category-distribution').get_json()

    assert body[0]['name'] == 'EDEBIYAT'
    assert body[0]['subcategories'] == [{'sub_category': 'ROMAN', 'book_count': 1}]
