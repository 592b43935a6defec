from datetime import datetime
from models import db, isoformat


class BorrowedBookEntry(db.Model):
    __tablename__ = 'borrowed_books'

    id = db.Column(db.Integer, primary_key=True)
    book_id = db.Column(db.Integer, db.ForeignKey('books.id', ondelete='CASCADE'), nullable=False, index=True)

    borrower_name = db.Column(db.String(200), nullable=False)
    borrower_contact = db.Column(db.String(200), nullable=True)
    borrowed_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    expected_return_date = db.Column(db.DateTime, nullable=True)
    actual_return_date = db.Column(db.DateTime, nullable=True)
    is_returned = db.Column(db.Boolean, default=False, nullable=False, index=True)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<BorrowedBookEntry {self.id}: Book {self.book_id} - {self.borrower_name}>'

    def days_borrowed(self, now=None):
        now = now or datetime.utcnow()
        return (now - self.borrowed_date).days

    def to_dict(self, now=None, overdue_after_days=None):
        data = {
            'id': self.id,
            'book_id': self.book_id,
            'borrower_name': self.borrower_name,
            'borrower_contact': self.borrower_contact,
            'borrowed_date': isoformat(self.borrowed_date),
            'expected_return_date': isoformat(self.expected_return_date),
            'actual_return_date': isoformat(self.actual_return_date),
            'is_returned': self.is_returned,
            'notes': self.notes,
        }
        if self.book is not None:
            data['title'] = self.book.title
            data['publisher'] = self.book.publisher
            data['author_name'] = self.book.display_author
        if overdue_after_days is not None:
            days = self.days_borrowed(now)
            data['days_borrowed'] = days
            data['is_overdue'] = days > overdue_after_days and not self.is_returned
        return data
