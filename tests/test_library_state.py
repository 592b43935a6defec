from datetime import datetime

import pytest

from models import Book, BorrowedBookEntry, CurrentlyReadingEntry, ReadingHistoryEntry, WishlistItem
from services.errors import ConflictError, NotFoundError, ValidationError
from services.library_state import LibraryStateTracker, calculate_progress


def test_calculate_progress():
    assert calculate_progress(50, 200) == 25.0
    assert calculate_progress(1, 3) == 33.33
    assert calculate_progress(10, None) == 0
    assert calculate_progress(10, 0) == 0


def test_create_unread_book_has_no_history(make_book, session):
    book = make_book()
    assert book.is_read is False
    assert session.query(ReadingHistoryEntry).count() == 0


def test_create_read_book_appends_history(make_book, session):
    book = make_book(is_read=True, rating=5, notes='Bir başyapıt')

    history = session.query(ReadingHistoryEntry).filter_by(book_id=book.id).all()
    assert len(history) == 1
    assert history[0].rating == 5
    assert history[0].notes == 'Bir başyapıt'


def test_create_book_with_unknown_category(tracker):
    with pytest.raises(ValidationError) as exc:
        tracker.create_book(title='Kayıp', category_id=999)
    assert exc.value.errors == [{'field': 'category_id', 'msg': 'Category not found'}]


def test_mark_as_read(make_book, session):
    book = make_book()
    finished = datetime(2024, 3, 14, 9, 30)

    entry = LibraryStateTracker(session).mark_as_read(book.id, rating=4, notes='Güzeldi', finish_date=finished)

    assert entry.finish_date == finished
    assert entry.rating == 4
    book = session.get(Book, book.id)
    assert book.is_read is True
    assert book.rating == 4


def test_mark_as_read_defaults_finish_date_to_now(make_book, session):
    now = datetime(2024, 5, 1, 12, 0)
    book = make_book()

    entry = LibraryStateTracker(session, now=lambda: now).mark_as_read(book.id)

    assert entry.finish_date == now
    assert entry.rating is None


def test_mark_as_read_twice_keeps_both_finishes(make_book, tracker, session):
    book = make_book()
    tracker.mark_as_read(book.id, rating=3)
    tracker.mark_as_read(book.id, rating=5)

    assert session.query(ReadingHistoryEntry).filter_by(book_id=book.id).count() == 2
    assert session.get(Book, book.id).rating == 5


def test_mark_as_read_unknown_book(tracker):
    with pytest.raises(NotFoundError):
        tracker.mark_as_read(12345, rating=4)


def test_mark_as_read_closes_active_reading(make_book, tracker, session):
    book = make_book(pages=300)
    entry = tracker.start_reading(book.id, current_page=100)

    tracker.mark_as_read(book.id, rating=5)

    assert session.get(CurrentlyReadingEntry, entry.id).is_active is False


def test_update_book_flipping_read_appends_history(make_book, tracker, session):
    book = make_book(rating=4)

    tracker.update_book(book.id, is_read=True)

    assert session.query(ReadingHistoryEntry).filter_by(book_id=book.id).count() == 1
    assert session.query(ReadingHistoryEntry).first().rating == 4


def test_delete_book_removes_dependents(make_book, tracker, session):
    book = make_book(is_read=True, pages=100)
    tracker.lend_book(book.id, borrower_name='Ayşe')

    tracker.delete_book(book.id)

    assert session.query(Book).count() == 0
    assert session.query(ReadingHistoryEntry).count() == 0
    assert session.query(BorrowedBookEntry).count() == 0


def test_lend_then_return_round_trip(make_book, tracker, session):
    book = make_book()

    borrowed = tracker.lend_book(book.id, borrower_name='Ayşe Yılmaz', borrowed_date=datetime(2024, 1, 5))
    assert session.get(Book, book.id).is_borrowed is True

    tracker.return_book(borrowed.id)

    assert session.get(Book, book.id).is_borrowed is False
    entries = session.query(BorrowedBookEntry).filter_by(book_id=book.id).all()
    assert len(entries) == 1
    assert entries[0].is_returned is True
    assert entries[0].actual_return_date is not None


def test_lend_already_borrowed_book(make_book, tracker, session):
    book = make_book()
    tracker.lend_book(book.id, borrower_name='Ayşe')

    with pytest.raises(ConflictError):
        tracker.lend_book(book.id, borrower_name='Mehmet')

    assert session.query(BorrowedBookEntry).filter_by(book_id=book.id, is_returned=False).count() == 1


def test_lend_rejects_open_borrow_even_if_flag_is_stale(make_book, tracker, session):
    book = make_book()
    tracker.lend_book(book.id, borrower_name='Ayşe')
    session.get(Book, book.id).is_borrowed = False
    session.commit()

    with pytest.raises(ConflictError):
        tracker.lend_book(book.id, borrower_name='Mehmet')


def test_book_can_be_lent_again_after_return(make_book, tracker, session):
    book = make_book()
    first = tracker.lend_book(book.id, borrower_name='Ayşe')
    tracker.return_book(first.id)

    tracker.lend_book(book.id, borrower_name='Mehmet')

    assert session.get(Book, book.id).is_borrowed is True
    assert session.query(BorrowedBookEntry).filter_by(book_id=book.id).count() == 2


def test_return_unknown_entry(tracker):
    with pytest.raises(NotFoundError):
        tracker.return_book(999)


def test_return_twice(make_book, tracker):
    book = make_book()
    borrowed = tracker.lend_book(book.id, borrower_name='Ayşe')
    tracker.return_book(borrowed.id)

    with pytest.raises(ConflictError):
        tracker.return_book(borrowed.id)


def test_reading_progress_example(make_book, tracker):
    book = make_book(pages=200)

    entry = tracker.start_reading(book.id, current_page=50)
    assert entry.total_pages == 200
    assert entry.reading_progress == 25.0

    entry = tracker.update_progress(entry.id, current_page=150)
    assert entry.reading_progress == 75.0


def test_start_reading_without_known_length(make_book, tracker):
    book = make_book()
    entry = tracker.start_reading(book.id, current_page=40)
    assert entry.total_pages is None
    assert entry.reading_progress == 0


def test_start_reading_twice_conflicts(make_book, tracker, session):
    book = make_book(pages=200)
    tracker.start_reading(book.id, current_page=10)

    with pytest.raises(ConflictError):
        tracker.start_reading(book.id, current_page=20)

    assert session.query(CurrentlyReadingEntry).filter_by(book_id=book.id, is_active=True).count() == 1


def test_start_reading_past_last_page(make_book, tracker):
    book = make_book(pages=100)
    with pytest.raises(ValidationError):
        tracker.start_reading(book.id, current_page=150)


def test_start_reading_unknown_book(tracker):
    with pytest.raises(NotFoundError):
        tracker.start_reading(404, current_page=1)


def test_update_progress_sets_last_read_date(make_book, session):
    book = make_book(pages=200)
    started = datetime(2024, 2, 1, 8, 0)
    later = datetime(2024, 2, 3, 21, 0)

    entry = LibraryStateTracker(session, now=lambda: started).start_reading(book.id, current_page=10)
    entry = LibraryStateTracker(session, now=lambda: later).update_progress(
        entry.id, current_page=60, notes='İkinci bölüm'
    )

    assert entry.started_date == started
    assert entry.last_read_date == later
    assert entry.notes == 'İkinci bölüm'
    assert entry.reading_progress == 30.0


def test_finish_reading_soft_closes(make_book, tracker, session):
    book = make_book(pages=200)
    entry = tracker.start_reading(book.id, current_page=200)

    tracker.finish_reading(entry.id)

    assert session.get(CurrentlyReadingEntry, entry.id).is_active is False
    # Finishing alone does not mark the book read
    assert session.get(Book, book.id).is_read is False

    with pytest.raises(NotFoundError):
        tracker.update_progress(entry.id, current_page=10)


def test_finish_reading_with_mark_read(make_book, tracker, session):
    book = make_book(pages=200)
    entry = tracker.start_reading(book.id, current_page=200)

    tracker.finish_reading(entry.id, mark_read=True, rating=5)

    book = session.get(Book, book.id)
    assert book.is_read is True
    assert book.rating == 5
    assert session.query(ReadingHistoryEntry).filter_by(book_id=book.id).count() == 1


def test_book_can_be_reread_after_finishing(make_book, tracker, session):
    book = make_book(pages=200)
    first = tracker.start_reading(book.id, current_page=200)
    tracker.finish_reading(first.id)

    second = tracker.start_reading(book.id, current_page=1)

    assert second.id != first.id
    assert session.query(CurrentlyReadingEntry).filter_by(book_id=book.id).count() == 2


def test_remove_from_currently_reading(make_book, tracker, session):
    book = make_book(pages=200)
    entry = tracker.start_reading(book.id, current_page=20)

    tracker.remove_from_currently_reading(entry.id)

    assert session.query(CurrentlyReadingEntry).count() == 0
    with pytest.raises(NotFoundError):
        tracker.remove_from_currently_reading(entry.id)


def test_purchase_wish(tracker, session):
    wish = WishlistItem(book_name='Beyaz Kale', author_name='Orhan Pamuk')
    session.add(wish)
    session.commit()

    tracker.purchase_wish(wish.id)

    assert session.get(WishlistItem, wish.id).is_purchased is True
    # The wish never turns into a book on its own
    assert session.query(Book).count() == 0


def test_failed_transition_rolls_back(make_book, tracker, session):
    book = make_book()
    tracker.lend_book(book.id, borrower_name='Ayşe')

    with pytest.raises(ConflictError):
        tracker.lend_book(book.id, borrower_name='Mehmet')

    names = [entry.borrower_name for entry in session.query(BorrowedBookEntry).all()]
    assert names == ['Ayşe']
