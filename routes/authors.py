from flask import Blueprint, request, jsonify
from sqlalchemy import func
import logging

from models import db, Author, Book
from forms.author_forms import AuthorForm, AuthorUpdateForm
from services.errors import ConflictError
from services.stats_service import StatisticsAggregator

logger = logging.getLogger(__name__)

bp = Blueprint('authors', __name__, url_prefix='/api/authors')


@bp.route('/')
def index():
    """Authors from the authors table with the number of linked books."""
    query = db.session.query(
        Author,
        func.count(Book.id).label('book_count')
    ).outerjoin(Book, Book.author_id == Author.id).group_by(Author.id)

    search = request.args.get('search', '').strip()
    if search:
        query = query.filter(Author.name.ilike(f'%{search}%'))

    rows = query.order_by(Author.name).all()
    return jsonify([
        dict(author.to_dict(), book_count=book_count)
        for author, book_count in rows
    ])


@bp.route('/from-books')
def from_books():
    """Authors as they appear on books (first name + last name pairs)."""
    search = request.args.get('search', '').strip() or None
    return jsonify(StatisticsAggregator().authors_from_books(search))


@bp.route('/books/<first_name>/<last_name>')
def books_by_name(first_name, last_name):
    summary, books = StatisticsAggregator().author_summary(first_name, last_name)
    return jsonify({
        'author': summary,
        'books': [book.to_dict() for book in books],
    })


@bp.route('/<int:author_id>')
def detail(author_id):
    author = db.get_or_404(Author, author_id, description='Author not found')
    books = author.books.order_by(Book.title).all()
    return jsonify(dict(author.to_dict(), books=[book.to_dict() for book in books]))


@bp.route('/', methods=['POST'])
def create():
    form = AuthorForm.from_json()
    author = Author(**form.cleaned_data())
    db.session.add(author)
    db.session.commit()

    logger.info(f"Created author {author.id}: {author.name}")
    return jsonify(author.to_dict()), 201


@bp.route('/<int:author_id>', methods=['PUT'])
def update(author_id):
    author = db.get_or_404(Author, author_id, description='Author not found')
    form = AuthorUpdateForm.from_json()

    for name, value in form.cleaned_data(partial=True).items():
        setattr(author, name, value)
    db.session.commit()

    return jsonify(author.to_dict())


@bp.route('/<int:author_id>', methods=['DELETE'])
def delete(author_id):
    author = db.get_or_404(Author, author_id, description='Author not found')

    if author.book_count > 0:
        raise ConflictError('Cannot delete author that has books assigned to them')

    db.session.delete(author)
    db.session.commit()

    logger.info(f"Deleted author {author_id}")
    return jsonify({'message': 'Author deleted successfully'})
