from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def isoformat(value):
    """Serialize a date/datetime column for JSON responses."""
    return value.isoformat() if value is not None else None


from models.category import Category
from models.author import Author
from models.book import Book
from models.reading_history import ReadingHistoryEntry
from models.currently_reading import CurrentlyReadingEntry
from models.borrowed_book import BorrowedBookEntry
from models.wishlist import WishlistItem
