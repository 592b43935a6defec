"""
Statistics Aggregator
Read-only dashboard metrics computed from the current table contents on every
call. Nothing here writes to the session.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy import case, extract, func, or_

from models import db
from models.book import Book
from models.category import Category
from models.reading_history import ReadingHistoryEntry
from models.borrowed_book import BorrowedBookEntry
from models.wishlist import WishlistItem

logger = logging.getLogger(__name__)


def _author_pair_filter():
    """Rows with both author name parts filled in."""
    return [
        Book.author_first_name.isnot(None),
        Book.author_last_name.isnot(None),
        Book.author_first_name != '',
        Book.author_last_name != '',
    ]


def _read_count():
    return func.coalesce(func.sum(case((Book.is_read.is_(True), 1), else_=0)), 0)


class StatisticsAggregator:
    """Derived views over books, categories, reading history and wishlist."""

    STREAK_WINDOW_DAYS = 30

    def __init__(self, db_session=None, now=None, streak_window_days=None):
        self.db = db_session or db.session
        self.now = now or datetime.utcnow
        if streak_window_days is not None:
            self.STREAK_WINDOW_DAYS = streak_window_days

    def overview(self) -> Dict:
        total_books = self.db.query(func.count(Book.id)).scalar() or 0
        read_books = self.db.query(func.count(Book.id)).filter(Book.is_read.is_(True)).scalar() or 0
        wishlist_books = self.db.query(func.count(WishlistItem.id)).filter(
            WishlistItem.is_purchased.is_(False)
        ).scalar() or 0
        borrowed_books = self.db.query(func.count(BorrowedBookEntry.id)).filter(
            BorrowedBookEntry.is_returned.is_(False)
        ).scalar() or 0
        total_authors = self.db.query(
            Book.author_first_name, Book.author_last_name
        ).filter(*_author_pair_filter()).distinct().count()
        total_categories = self.db.query(func.count(Category.id)).scalar() or 0

        reading_percentage = round(read_books / total_books * 100) if total_books > 0 else 0

        return {
            'total_books': total_books,
            'read_books': read_books,
            'wishlist_books': wishlist_books,
            'borrowed_books': borrowed_books,
            'total_authors': total_authors,
            'total_categories': total_categories,
            'reading_percentage': reading_percentage,
        }

    def recent_activity(self, limit: int = 5) -> List[Dict]:
        rows = self.db.query(ReadingHistoryEntry, Book).join(
            Book, ReadingHistoryEntry.book_id == Book.id
        ).order_by(ReadingHistoryEntry.finish_date.desc(), ReadingHistoryEntry.id.desc()).limit(limit).all()

        return [
            {
                'book_id': book.id,
                'title': book.title,
                'author_name': book.author_name,
                'finish_date': entry.finish_date.isoformat(),
                'rating': entry.rating,
            }
            for entry, book in rows
        ]

    def category_distribution(self) -> List[Dict]:
        book_count = func.count(Book.id)
        categories = self.db.query(
            Category,
            book_count.label('book_count'),
            _read_count().label('read_count'),
        ).outerjoin(Book, Book.category_id == Category.id).group_by(Category.id).order_by(
            book_count.desc(), Category.name
        ).all()

        sub_counts = self.db.query(
            Book.category_id,
            Book.sub_category,
            func.count(Book.id).label('book_count'),
        ).filter(
            Book.category_id.isnot(None),
            Book.sub_category.isnot(None),
            Book.sub_category != '',
        ).group_by(Book.category_id, Book.sub_category).order_by(
            func.count(Book.id).desc(), Book.sub_category
        ).all()

        subcategories = {}
        for category_id, sub_category, count in sub_counts:
            subcategories.setdefault(category_id, []).append({
                'sub_category': sub_category,
                'book_count': count,
            })

        return [
            {
                'id': category.id,
                'name': category.name,
                'color': category.color,
                'description': category.description,
                'book_count': count,
                'read_count': int(read_count),
                'subcategories': subcategories.get(category.id, []),
            }
            for category, count, read_count in categories
        ]

    def monthly_reading_progress(self, year: int) -> Dict:
        """Finished books per calendar month of `year`, always twelve entries."""
        month = extract('month', ReadingHistoryEntry.finish_date)
        rows = self.db.query(
            month.label('month'),
            func.count(ReadingHistoryEntry.id),
        ).filter(
            extract('year', ReadingHistoryEntry.finish_date) == year
        ).group_by(month).all()

        counts = {int(m): c for m, c in rows}
        return {
            'year': year,
            'monthly_data': [
                {'month': m, 'books_read': counts.get(m, 0)}
                for m in range(1, 13)
            ],
        }

    def top_authors(self, limit: int = 10) -> List[Dict]:
        book_count = func.count(Book.id)
        rows = self.db.query(
            Book.author_first_name,
            Book.author_last_name,
            book_count.label('book_count'),
            _read_count().label('books_read'),
        ).filter(*_author_pair_filter()).group_by(
            Book.author_first_name, Book.author_last_name
        ).order_by(
            book_count.desc(), Book.author_last_name, Book.author_first_name
        ).limit(limit).all()

        return [
            {
                'name': f'{first} {last}',
                'first_name': first,
                'last_name': last,
                'book_count': count,
                'books_read': int(books_read),
            }
            for first, last, count, books_read in rows
        ]

    def achievements(self) -> Dict:
        """
        Reading achievements from the full history.

        current_streak is the number of finishes in the trailing window and
        longest_streak is the total number of finishes. Neither is a
        consecutive-day streak.
        """
        history = self.db.query(ReadingHistoryEntry.finish_date, ReadingHistoryEntry.rating).all()

        window_start = self.now() - timedelta(days=self.STREAK_WINDOW_DAYS)
        recent = [finish for finish, _ in history if finish >= window_start]
        reading_days = {finish.date() for finish, _ in history}
        ratings = [rating for _, rating in history if rating and rating > 0]
        average_rating = round(sum(ratings) / len(ratings), 1) if ratings else 0.0

        return {
            'longest_streak': len(history),
            'current_streak': len(recent),
            'total_reading_days': len(reading_days),
            'average_rating': average_rating,
        }

    def wishlist_stats(self) -> Dict:
        total = self.db.query(func.count(WishlistItem.id)).scalar() or 0
        purchased = self.db.query(func.count(WishlistItem.id)).filter(
            WishlistItem.is_purchased.is_(True)
        ).scalar() or 0
        total_value = self.db.query(func.sum(WishlistItem.price)).filter(
            WishlistItem.price.isnot(None)
        ).scalar()

        return {
            'total_wishes': total,
            'purchased_wishes': purchased,
            'pending_wishes': total - purchased,
            'estimated_total_value': float(total_value or 0),
        }

    def authors_from_books(self, search: Optional[str] = None) -> List[Dict]:
        avg_rating = func.avg(case((Book.rating > 0, Book.rating), else_=None))
        query = self.db.query(
            Book.author_first_name,
            Book.author_last_name,
            func.count(Book.id).label('book_count'),
            _read_count().label('read_count'),
            avg_rating.label('avg_rating'),
        ).filter(*_author_pair_filter())

        if search:
            query = query.filter(or_(
                Book.author_first_name.ilike(f'%{search}%'),
                Book.author_last_name.ilike(f'%{search}%'),
            ))

        rows = query.group_by(Book.author_first_name, Book.author_last_name).order_by(
            Book.author_last_name, Book.author_first_name
        ).all()

        return [
            {
                'first_name': first,
                'last_name': last,
                'full_name': f'{first} {last}',
                'book_count': count,
                'read_count': int(read_count),
                'avg_rating': round(float(avg), 1) if avg is not None else None,
            }
            for first, last, count, read_count, avg in rows
        ]

    @staticmethod
    def summarize_books(books: List[Book]) -> Dict:
        """Totals shared by the author and category detail views."""
        rated = [b.rating for b in books if b.rating]
        return {
            'total_books': len(books),
            'read_books': sum(1 for b in books if b.is_read),
            'avg_rating': round(sum(rated) / len(rated), 1) if rated else 0.0,
        }

    def author_summary(self, first_name: str, last_name: str):
        books = self.db.query(Book).filter(
            Book.author_first_name == first_name,
            Book.author_last_name == last_name,
        ).order_by(Book.title).all()

        summary = {
            'first_name': first_name,
            'last_name': last_name,
            'full_name': f'{first_name} {last_name}',
        }
        summary.update(self.summarize_books(books))
        return summary, books

    def category_summary(self, category: Category, subcategory: Optional[str] = None):
        query = self.db.query(Book).filter(Book.category_id == category.id)
        if subcategory:
            query = query.filter(Book.sub_category == subcategory)
        books = query.order_by(Book.title).all()

        summary = category.to_dict()
        summary.update(self.summarize_books(books))
        summary['subcategories'] = sorted({b.sub_category for b in books if b.sub_category})
        return summary, books
