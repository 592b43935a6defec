from datetime import datetime
from models import db, isoformat


class Author(db.Model):
    __tablename__ = 'authors'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(300), nullable=False, index=True)
    biography = db.Column(db.Text, nullable=True)
    nationality = db.Column(db.String(100), nullable=True)
    birth_date = db.Column(db.Date, nullable=True)
    death_date = db.Column(db.Date, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    books = db.relationship('Book', backref='author', lazy='dynamic')

    def __repr__(self):
        return f'<Author {self.id}: {self.name}>'

    @property
    def book_count(self):
        return self.books.count()

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'biography': self.biography,
            'nationality': self.nationality,
            'birth_date': isoformat(self.birth_date),
            'death_date': isoformat(self.death_date),
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
