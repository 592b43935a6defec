from flask import Blueprint, jsonify
import logging

from models import db, Book, CurrentlyReadingEntry
from forms.reading_forms import StartReadingForm, ProgressForm, FinishReadingForm
from services.library_state import LibraryStateTracker

logger = logging.getLogger(__name__)

bp = Blueprint('currently_reading', __name__, url_prefix='/api/currently-reading')


@bp.route('/')
def index():
    entries = CurrentlyReadingEntry.query.filter(
        CurrentlyReadingEntry.is_active.is_(True)
    ).order_by(CurrentlyReadingEntry.last_read_date.desc()).all()
    return jsonify([entry.to_dict() for entry in entries])


@bp.route('/available-books')
def available_books():
    """Unread books that are not already being read."""
    active_ids = db.select(CurrentlyReadingEntry.book_id).where(
        CurrentlyReadingEntry.is_active.is_(True)
    )
    books = Book.query.filter(
        Book.is_read.is_(False),
        Book.id.notin_(active_ids)
    ).order_by(Book.title).all()

    return jsonify([
        {
            'id': book.id,
            'title': book.title,
            'pages': book.pages,
            'publisher': book.publisher,
            'publication_year': book.publication_year,
            'author_name': book.author_name,
        }
        for book in books
    ])


@bp.route('/', methods=['POST'])
def start():
    form = StartReadingForm.from_json()
    entry = LibraryStateTracker().start_reading(
        form.book_id.data,
        current_page=form.current_page.data,
        total_pages=form.total_pages.data,
        notes=form.notes.data or None,
    )
    return jsonify(entry.to_dict()), 201


@bp.route('/<int:entry_id>', methods=['PATCH'])
def update_progress(entry_id):
    form = ProgressForm.from_json()
    entry = LibraryStateTracker().update_progress(
        entry_id,
        current_page=form.current_page.data,
        total_pages=form.total_pages.data,
        notes=form.notes.data or None,
    )
    return jsonify(entry.to_dict())


@bp.route('/<int:entry_id>/finish', methods=['PATCH'])
def finish(entry_id):
    form = FinishReadingForm.from_json()
    entry = LibraryStateTracker().finish_reading(
        entry_id,
        mark_read=form.mark_read.data,
        rating=form.rating.data,
        notes=form.notes.data or None,
    )
    return jsonify({'message': 'Book marked as finished', 'entry': entry.to_dict()})


@bp.route('/<int:entry_id>', methods=['DELETE'])
def remove(entry_id):
    LibraryStateTracker().remove_from_currently_reading(entry_id)
    return jsonify({'message': 'Book removed from currently reading'})
