from flask import Blueprint, request, jsonify, current_app
from sqlalchemy import or_
import logging
import math

from models import db, Book
from forms.book_forms import BookForm, BookUpdateForm, MarkReadForm
from services.library_state import LibraryStateTracker

logger = logging.getLogger(__name__)

bp = Blueprint('books', __name__, url_prefix='/api/books')

SORTABLE_COLUMNS = {
    'created_at': Book.created_at,
    'updated_at': Book.updated_at,
    'date_added': Book.date_added,
    'title': Book.title,
    'author_last_name': Book.author_last_name,
    'author_first_name': Book.author_first_name,
    'publication_year': Book.publication_year,
    'pages': Book.pages,
    'price': Book.price,
    'rating': Book.rating,
}


def parse_bool_arg(name):
    value = request.args.get(name)
    if value is None:
        return None
    return value.lower() in ('true', '1', 'yes')


@bp.route('/')
def index():
    page = max(request.args.get('page', 1, type=int), 1)
    default_limit = current_app.config.get('BOOKS_PER_PAGE', 50)
    max_limit = current_app.config.get('MAX_BOOKS_PER_PAGE', 200)
    limit = request.args.get('limit', default_limit, type=int)
    if limit < 1 or limit > max_limit:
        limit = default_limit

    query = Book.query

    search = request.args.get('search', '').strip()
    if search:
        query = query.filter(
            or_(
                Book.title.ilike(f'%{search}%'),
                Book.description.ilike(f'%{search}%'),
                Book.author_first_name.ilike(f'%{search}%'),
                Book.author_last_name.ilike(f'%{search}%'),
                Book.translator.ilike(f'%{search}%')
            )
        )

    category_filter = request.args.get('category', type=int)
    if category_filter:
        query = query.filter(Book.category_id == category_filter)

    author = request.args.get('author', '').strip()
    if author:
        query = query.filter(
            or_(
                Book.author_first_name.ilike(f'%{author}%'),
                Book.author_last_name.ilike(f'%{author}%'),
                (Book.author_first_name + ' ' + Book.author_last_name).ilike(f'%{author}%')
            )
        )

    for flag in ('is_read', 'is_wishlist', 'is_borrowed'):
        value = parse_bool_arg(flag)
        if value is not None:
            query = query.filter(getattr(Book, flag).is_(value))

    # Sort with direction
    sort_by = request.args.get('sort', 'created_at')
    column = SORTABLE_COLUMNS.get(sort_by, Book.created_at)
    order = request.args.get('order', 'desc')
    if order not in ('asc', 'desc'):
        order = 'desc'
    query = query.order_by(column.asc() if order == 'asc' else column.desc(), Book.id.asc())

    pagination = query.paginate(page=page, per_page=limit, error_out=False)

    return jsonify({
        'data': [book.to_dict() for book in pagination.items],
        'pagination': {
            'page': page,
            'limit': limit,
            'total': pagination.total,
            'pages': math.ceil(pagination.total / limit),
        }
    })


@bp.route('/<int:book_id>')
def detail(book_id):
    book = db.get_or_404(Book, book_id, description='Book not found')
    return jsonify(book.to_dict(include_history=True))


@bp.route('/', methods=['POST'])
def create():
    form = BookForm.from_json()
    book = LibraryStateTracker().create_book(**form.cleaned_data())
    return jsonify(book.to_dict()), 201


@bp.route('/<int:book_id>', methods=['PUT'])
def update(book_id):
    form = BookUpdateForm.from_json()
    book = LibraryStateTracker().update_book(book_id, **form.cleaned_data(partial=True))
    return jsonify(book.to_dict())


@bp.route('/<int:book_id>/read', methods=['PATCH'])
def mark_read(book_id):
    form = MarkReadForm.from_json()
    entry = LibraryStateTracker().mark_as_read(
        book_id,
        rating=form.rating.data,
        notes=form.notes.data or None,
        finish_date=form.finish_date.data,
    )
    return jsonify({
        'message': 'Book marked as read successfully',
        'reading_history': entry.to_dict(),
    })


@bp.route('/<int:book_id>', methods=['DELETE'])
def delete(book_id):
    LibraryStateTracker().delete_book(book_id)
    return jsonify({'message': 'Book deleted successfully'})
