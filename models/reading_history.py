from datetime import datetime
from models import db, isoformat


class ReadingHistoryEntry(db.Model):
    """One row per finish event; a re-read book gets another row."""
    __tablename__ = 'reading_history'

    id = db.Column(db.Integer, primary_key=True)
    book_id = db.Column(db.Integer, db.ForeignKey('books.id', ondelete='CASCADE'), nullable=False, index=True)

    start_date = db.Column(db.Date, nullable=True)
    finish_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    rating = db.Column(db.Integer, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<ReadingHistoryEntry {self.id}: Book {self.book_id} finished {self.finish_date}>'

    def to_dict(self):
        return {
            'id': self.id,
            'book_id': self.book_id,
            'start_date': isoformat(self.start_date),
            'finish_date': isoformat(self.finish_date),
            'rating': self.rating,
            'notes': self.notes,
            'created_at': isoformat(self.created_at),
        }
