from datetime import datetime
from models import db, isoformat


class Book(db.Model):
    __tablename__ = 'books'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(500), nullable=False, index=True)
    author_first_name = db.Column(db.String(150), index=True)
    author_last_name = db.Column(db.String(150), index=True)
    author_id = db.Column(db.Integer, db.ForeignKey('authors.id', ondelete='SET NULL'), nullable=True)
    translator = db.Column(db.String(300))

    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True, index=True)
    sub_category = db.Column(db.String(100))

    publisher = db.Column(db.String(200))
    description = db.Column(db.Text)
    pages = db.Column(db.Integer)
    publication_year = db.Column(db.Integer)
    price = db.Column(db.Numeric(10, 2, asdecimal=False))

    rating = db.Column(db.Integer)
    is_read = db.Column(db.Boolean, default=False, nullable=False, index=True)
    is_wishlist = db.Column(db.Boolean, default=False, nullable=False)
    is_borrowed = db.Column(db.Boolean, default=False, nullable=False, index=True)
    notes = db.Column(db.Text)

    date_added = db.Column(db.DateTime, default=datetime.utcnow)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    reading_history = db.relationship('ReadingHistoryEntry', backref='book', cascade='all, delete-orphan',
                                      order_by='ReadingHistoryEntry.finish_date.desc()')
    reading_sessions = db.relationship('CurrentlyReadingEntry', backref='book', cascade='all, delete-orphan')
    borrowed_history = db.relationship('BorrowedBookEntry', backref='book', cascade='all, delete-orphan',
                                       order_by='BorrowedBookEntry.borrowed_date.desc()')

    __table_args__ = (
        db.CheckConstraint('rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_books_rating'),
    )

    def __repr__(self):
        return f'<Book {self.id}: {self.title} by {self.author_name}>'

    @property
    def author_name(self):
        parts = [self.author_first_name, self.author_last_name]
        name = ' '.join(p.strip() for p in parts if p and p.strip())
        return name or None

    @property
    def display_author(self):
        return self.author_name or 'Unknown Author'

    def to_dict(self, include_history=False):
        data = {
            'id': self.id,
            'title': self.title,
            'author_first_name': self.author_first_name,
            'author_last_name': self.author_last_name,
            'author_name': self.author_name,
            'author_id': self.author_id,
            'translator': self.translator,
            'category_id': self.category_id,
            'category_name': self.category.name if self.category else None,
            'category_color': self.category.color if self.category else None,
            'sub_category': self.sub_category,
            'publisher': self.publisher,
            'description': self.description,
            'pages': self.pages,
            'publication_year': self.publication_year,
            'price': self.price,
            'rating': self.rating,
            'is_read': self.is_read,
            'is_wishlist': self.is_wishlist,
            'is_borrowed': self.is_borrowed,
            'notes': self.notes,
            'date_added': isoformat(self.date_added),
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
        if include_history:
            data['reading_history'] = [entry.to_dict() for entry in self.reading_history]
            data['borrowed_history'] = [entry.to_dict() for entry in self.borrowed_history]
        return data
