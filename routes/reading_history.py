from flask import Blueprint, request, jsonify, current_app
from sqlalchemy import extract
import math

from models import ReadingHistoryEntry, Book

bp = Blueprint('reading_history', __name__, url_prefix='/api/reading-history')


@bp.route('/')
def index():
    """Finished books, newest first."""
    page = max(request.args.get('page', 1, type=int), 1)
    default_limit = current_app.config.get('HISTORY_PER_PAGE', 20)
    limit = request.args.get('limit', default_limit, type=int)
    if limit < 1:
        limit = default_limit

    query = ReadingHistoryEntry.query.join(Book, ReadingHistoryEntry.book_id == Book.id)

    year = request.args.get('year', type=int)
    if year:
        query = query.filter(extract('year', ReadingHistoryEntry.finish_date) == year)

    query = query.order_by(ReadingHistoryEntry.finish_date.desc(), ReadingHistoryEntry.id.desc())
    pagination = query.paginate(page=page, per_page=limit, error_out=False)

    data = []
    for entry in pagination.items:
        item = entry.to_dict()
        item.update({
            'title': entry.book.title,
            'pages': entry.book.pages,
            'author_name': entry.book.author_name,
        })
        data.append(item)

    return jsonify({
        'data': data,
        'pagination': {
            'page': page,
            'limit': limit,
            'total': pagination.total,
            'pages': math.ceil(pagination.total / limit),
        }
    })
