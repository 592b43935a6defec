"""
Library State Tracker
Multi-record transitions that keep the status flags on books consistent with
the reading history, currently-reading and borrowed-book tables.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from models import db
from models.book import Book
from models.category import Category
from models.author import Author
from models.reading_history import ReadingHistoryEntry
from models.currently_reading import CurrentlyReadingEntry
from models.borrowed_book import BorrowedBookEntry
from models.wishlist import WishlistItem
from services.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def calculate_progress(current_page: int, total_pages: Optional[int]) -> float:
    """Percentage read, rounded to two decimals; 0 when the length is unknown."""
    if not total_pages:
        return 0
    return round(current_page / total_pages * 100, 2)


class LibraryStateTracker:
    """
    Performs every state change that touches more than one record.

    Each public method runs in its own transaction: either all of its writes
    are committed or the session is rolled back and the error re-raised.
    """

    def __init__(self, db_session=None, now=None):
        self.db = db_session or db.session
        self.now = now or datetime.utcnow

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _get_book(self, book_id: int, for_update: bool = False) -> Book:
        query = self.db.query(Book).filter(Book.id == book_id)
        if for_update:
            query = query.with_for_update()
        book = query.first()
        if book is None:
            raise NotFoundError('Book not found')
        return book

    def _get_active_entry(self, entry_id: int) -> CurrentlyReadingEntry:
        entry = self.db.query(CurrentlyReadingEntry).filter_by(id=entry_id, is_active=True).first()
        if entry is None:
            raise NotFoundError('Currently reading record not found')
        return entry

    def _check_references(self, fields: dict):
        errors = []
        category_id = fields.get('category_id')
        if category_id is not None and self.db.get(Category, category_id) is None:
            errors.append({'field': 'category_id', 'msg': 'Category not found'})
        author_id = fields.get('author_id')
        if author_id is not None and self.db.get(Author, author_id) is None:
            errors.append({'field': 'author_id', 'msg': 'Author not found'})
        if errors:
            raise ValidationError(errors)

    def _record_finish(self, book: Book, rating=None, notes=None, finish_date=None) -> ReadingHistoryEntry:
        book.is_read = True
        if rating:
            book.rating = rating

        entry = ReadingHistoryEntry(
            book_id=book.id,
            finish_date=finish_date or self.now(),
            rating=rating,
            notes=notes,
        )
        self.db.add(entry)

        # A finished book cannot stay in progress
        active = self.db.query(CurrentlyReadingEntry).filter_by(book_id=book.id, is_active=True).first()
        if active is not None:
            active.is_active = False
        return entry

    # Books

    def create_book(self, **fields) -> Book:
        """Insert a book; a book created as read gets its history entry too."""
        notes = fields.get('notes')
        self._check_references(fields)

        with self._transaction():
            book = Book(**fields)
            self.db.add(book)
            self.db.flush()

            if book.is_read:
                self.db.add(ReadingHistoryEntry(
                    book_id=book.id,
                    finish_date=self.now(),
                    rating=book.rating,
                    notes=notes,
                ))

        logger.info(f"Created book {book.id}: {book.title}")
        return book

    def update_book(self, book_id: int, **fields) -> Book:
        self._check_references(fields)

        with self._transaction():
            book = self._get_book(book_id)
            becomes_read = fields.get('is_read') and not book.is_read
            for name, value in fields.items():
                setattr(book, name, value)
            if becomes_read:
                self._record_finish(book, rating=book.rating)

        logger.info(f"Updated book {book.id}")
        return book

    def delete_book(self, book_id: int):
        with self._transaction():
            book = self._get_book(book_id)
            self.db.delete(book)
        logger.info(f"Deleted book {book_id}")

    def mark_as_read(self, book_id: int, rating: Optional[int] = None, notes: Optional[str] = None,
                     finish_date: Optional[datetime] = None) -> ReadingHistoryEntry:
        with self._transaction():
            book = self._get_book(book_id)
            entry = self._record_finish(book, rating=rating, notes=notes, finish_date=finish_date)

        logger.info(f"Book {book_id} marked as read")
        return entry

    # Borrowing

    def lend_book(self, book_id: int, borrower_name: str, borrowed_date: Optional[datetime] = None,
                  borrower_contact: Optional[str] = None, notes: Optional[str] = None,
                  expected_return_date: Optional[datetime] = None) -> BorrowedBookEntry:
        with self._transaction():
            # Re-read under the transaction so two lends of one book cannot both pass
            book = self._get_book(book_id, for_update=True)
            open_borrow = self.db.query(BorrowedBookEntry).filter_by(
                book_id=book.id, is_returned=False
            ).first()
            if book.is_borrowed or open_borrow is not None:
                raise ConflictError('Book is already borrowed')

            book.is_borrowed = True
            entry = BorrowedBookEntry(
                book_id=book.id,
                borrower_name=borrower_name,
                borrower_contact=borrower_contact,
                borrowed_date=borrowed_date or self.now(),
                expected_return_date=expected_return_date,
                notes=notes,
                is_returned=False,
            )
            self.db.add(entry)

        logger.info(f"Book {book_id} lent to {borrower_name}")
        return entry

    def return_book(self, entry_id: int, actual_return_date: Optional[datetime] = None) -> BorrowedBookEntry:
        with self._transaction():
            entry = self.db.get(BorrowedBookEntry, entry_id)
            if entry is None:
                raise NotFoundError('Borrowed record not found')
            if entry.is_returned:
                raise ConflictError('Book has already been returned')

            entry.is_returned = True
            entry.actual_return_date = actual_return_date or self.now()
            entry.book.is_borrowed = False

        logger.info(f"Book {entry.book_id} returned by {entry.borrower_name}")
        return entry

    # Currently reading

    def start_reading(self, book_id: int, current_page: int, total_pages: Optional[int] = None,
                      notes: Optional[str] = None) -> CurrentlyReadingEntry:
        try:
            with self._transaction():
                book = self._get_book(book_id)
                existing = self.db.query(CurrentlyReadingEntry).filter_by(book_id=book.id, is_active=True).first()
                if existing is not None:
                    raise ConflictError('Book is already in currently reading list')

                total = total_pages or book.pages
                if total and current_page > total:
                    raise ValidationError([{'field': 'current_page', 'msg': 'Current page cannot exceed total pages'}])

                now = self.now()
                entry = CurrentlyReadingEntry(
                    book_id=book.id,
                    current_page=current_page,
                    total_pages=total,
                    reading_progress=calculate_progress(current_page, total),
                    notes=notes,
                    started_date=now,
                    last_read_date=now,
                    is_active=True,
                )
                self.db.add(entry)
                self.db.flush()
        except IntegrityError:
            # Lost a race against another start for the same book
            raise ConflictError('Book is already in currently reading list') from None

        logger.info(f"Started reading book {book_id} at page {current_page}")
        return entry

    def update_progress(self, entry_id: int, current_page: int, total_pages: Optional[int] = None,
                        notes: Optional[str] = None) -> CurrentlyReadingEntry:
        with self._transaction():
            entry = self._get_active_entry(entry_id)
            total = total_pages or entry.total_pages or entry.book.pages
            if total and current_page > total:
                raise ValidationError([{'field': 'current_page', 'msg': 'Current page cannot exceed total pages'}])

            entry.current_page = current_page
            entry.total_pages = total
            entry.reading_progress = calculate_progress(current_page, total)
            if notes is not None:
                entry.notes = notes
            entry.last_read_date = self.now()

        logger.debug(f"Reading entry {entry_id} now at {entry.reading_progress}%")
        return entry

    def finish_reading(self, entry_id: int, mark_read: bool = False, rating: Optional[int] = None,
                       notes: Optional[str] = None) -> CurrentlyReadingEntry:
        """
        Close an active entry. The book is only marked read when the caller
        asks for it with mark_read.
        """
        with self._transaction():
            entry = self._get_active_entry(entry_id)
            entry.is_active = False
            entry.last_read_date = self.now()
            if mark_read:
                self._record_finish(entry.book, rating=rating, notes=notes)

        logger.info(f"Finished reading entry {entry_id} (book {entry.book_id}, mark_read={mark_read})")
        return entry

    def remove_from_currently_reading(self, entry_id: int):
        with self._transaction():
            entry = self._get_active_entry(entry_id)
            self.db.delete(entry)
        logger.info(f"Removed reading entry {entry_id}")

    # Wishlist

    def purchase_wish(self, wish_id: int) -> WishlistItem:
        with self._transaction():
            wish = self.db.get(WishlistItem, wish_id)
            if wish is None:
                raise NotFoundError('Wish not found')
            wish.is_purchased = True
        logger.info(f"Wish {wish_id} marked as purchased")
        return wish
