from datetime import datetime
from models import db, isoformat


class WishlistItem(db.Model):
    """A wanted book; free text, never linked to the books table."""
    __tablename__ = 'wishlist'

    id = db.Column(db.Integer, primary_key=True)
    book_name = db.Column(db.String(500), nullable=False, index=True)
    author_name = db.Column(db.String(300), nullable=False)
    notes = db.Column(db.Text, nullable=True)
    price = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=True)
    publisher = db.Column(db.String(200), nullable=True)
    is_purchased = db.Column(db.Boolean, default=False, nullable=False, index=True)
    added_date = db.Column(db.DateTime, default=datetime.utcnow)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<WishlistItem {self.id}: {self.book_name} by {self.author_name}>'

    def to_dict(self):
        return {
            'id': self.id,
            'book_name': self.book_name,
            'author_name': self.author_name,
            'notes': self.notes,
            'price': self.price,
            'publisher': self.publisher,
            'is_purchased': self.is_purchased,
            'added_date': isoformat(self.added_date),
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
