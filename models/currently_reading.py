from datetime import datetime
from models import db, isoformat


class CurrentlyReadingEntry(db.Model):
    __tablename__ = 'currently_reading'

    id = db.Column(db.Integer, primary_key=True)
    book_id = db.Column(db.Integer, db.ForeignKey('books.id', ondelete='CASCADE'), nullable=False, index=True)

    current_page = db.Column(db.Integer, nullable=False)
    total_pages = db.Column(db.Integer, nullable=True)
    reading_progress = db.Column(db.Numeric(5, 2, asdecimal=False), default=0)

    started_date = db.Column(db.DateTime, default=datetime.utcnow)
    last_read_date = db.Column(db.DateTime, default=datetime.utcnow)
    notes = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # One active entry per book; finished (inactive) entries may pile up
    __table_args__ = (
        db.Index(
            'uq_currently_reading_active_book',
            'book_id',
            unique=True,
            sqlite_where=db.text('is_active = 1'),
            postgresql_where=db.text('is_active'),
        ),
    )

    def __repr__(self):
        return f'<CurrentlyReadingEntry {self.id}: Book {self.book_id} - {self.reading_progress}%>'

    def to_dict(self):
        data = {
            'id': self.id,
            'book_id': self.book_id,
            'current_page': self.current_page,
            'total_pages': self.total_pages,
            'reading_progress': self.reading_progress,
            'started_date': isoformat(self.started_date),
            'last_read_date': isoformat(self.last_read_date),
            'notes': self.notes,
            'is_active': self.is_active,
        }
        if self.book is not None:
            data.update({
                'title': self.book.title,
                'publisher': self.book.publisher,
                'publication_year': self.book.publication_year,
                'rating': self.book.rating,
                'is_read': self.book.is_read,
                'author_name': self.book.author_name,
            })
        return data
