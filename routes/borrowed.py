from flask import Blueprint, request, jsonify, current_app
from datetime import datetime
import logging

from models import BorrowedBookEntry, Book
from forms.borrow_forms import LendForm, ReturnForm
from services.library_state import LibraryStateTracker

logger = logging.getLogger(__name__)

bp = Blueprint('borrowed', __name__, url_prefix='/api/borrowed')


@bp.route('/')
def index():
    """Lending records; status is one of all, active or returned."""
    status = request.args.get('status', 'all')

    query = BorrowedBookEntry.query
    if status == 'active':
        query = query.filter(BorrowedBookEntry.is_returned.is_(False))
    elif status == 'returned':
        query = query.filter(BorrowedBookEntry.is_returned.is_(True))

    entries = query.order_by(BorrowedBookEntry.borrowed_date.desc(), BorrowedBookEntry.id.desc()).all()

    now = datetime.utcnow()
    overdue_after = current_app.config.get('OVERDUE_AFTER_DAYS', 60)
    return jsonify([entry.to_dict(now=now, overdue_after_days=overdue_after) for entry in entries])


@bp.route('/available-books')
def available_books():
    books = Book.query.filter(Book.is_borrowed.is_(False)).order_by(Book.title).all()
    return jsonify([
        {
            'id': book.id,
            'title': book.title,
            'publisher': book.publisher,
            'author_name': book.display_author,
        }
        for book in books
    ])


@bp.route('/', methods=['POST'])
def lend():
    form = LendForm.from_json()
    entry = LibraryStateTracker().lend_book(
        form.book_id.data,
        borrower_name=form.borrower_name.data.strip(),
        borrowed_date=form.borrowed_date.data,
        borrower_contact=form.borrower_contact.data or None,
        notes=form.notes.data or None,
        expected_return_date=form.expected_return_date.data,
    )
    return jsonify({'message': 'Book lent successfully', 'borrowed': entry.to_dict()}), 201


@bp.route('/<int:entry_id>/return', methods=['PATCH'])
def return_book(entry_id):
    form = ReturnForm.from_json()
    entry = LibraryStateTracker().return_book(entry_id, actual_return_date=form.actual_return_date.data)
    return jsonify({'message': 'Book returned successfully', 'borrowed': entry.to_dict()})
