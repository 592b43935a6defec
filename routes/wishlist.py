from flask import Blueprint, request, jsonify
from sqlalchemy import func, or_
import logging

from models import db, WishlistItem
from forms.wishlist_forms import WishForm, WishUpdateForm
from services.errors import ConflictError
from services.library_state import LibraryStateTracker
from services.stats_service import StatisticsAggregator

logger = logging.getLogger(__name__)

bp = Blueprint('wishlist', __name__, url_prefix='/api/wishlist')


def find_duplicate(book_name, author_name, exclude_id=None):
    query = WishlistItem.query.filter(
        func.lower(WishlistItem.book_name) == book_name.lower(),
        func.lower(WishlistItem.author_name) == author_name.lower(),
    )
    if exclude_id is not None:
        query = query.filter(WishlistItem.id != exclude_id)
    return query.first()


@bp.route('/')
def index():
    query = WishlistItem.query

    search = request.args.get('search', '').strip()
    if search:
        query = query.filter(
            or_(
                WishlistItem.book_name.ilike(f'%{search}%'),
                WishlistItem.author_name.ilike(f'%{search}%')
            )
        )

    wishes = query.order_by(WishlistItem.added_date.desc(), WishlistItem.id.desc()).all()
    return jsonify([wish.to_dict() for wish in wishes])


@bp.route('/stats')
def stats():
    return jsonify(StatisticsAggregator().wishlist_stats())


@bp.route('/', methods=['POST'])
def create():
    form = WishForm.from_json()
    data = form.cleaned_data()

    if find_duplicate(data['book_name'], data['author_name']):
        raise ConflictError('This book is already in your wishlist')

    wish = WishlistItem(**data)
    db.session.add(wish)
    db.session.commit()

    logger.info(f"Added wish {wish.id}: {wish.book_name}")
    return jsonify(wish.to_dict()), 201


@bp.route('/<int:wish_id>', methods=['PUT'])
def update(wish_id):
    wish = db.get_or_404(WishlistItem, wish_id, description='Wish not found')
    form = WishUpdateForm.from_json()
    data = form.cleaned_data(partial=True)

    book_name = data.get('book_name', wish.book_name)
    author_name = data.get('author_name', wish.author_name)
    if find_duplicate(book_name, author_name, exclude_id=wish_id):
        raise ConflictError('This book is already in your wishlist')

    for name, value in data.items():
        setattr(wish, name, value)
    db.session.commit()

    return jsonify(wish.to_dict())


@bp.route('/<int:wish_id>', methods=['DELETE'])
def delete(wish_id):
    wish = db.get_or_404(WishlistItem, wish_id, description='Wish not found')
    db.session.delete(wish)
    db.session.commit()

    logger.info(f"Deleted wish {wish_id}")
    return jsonify({'message': 'Wish deleted from wishlist successfully'})


@bp.route('/<int:wish_id>/purchase', methods=['PATCH'])
def purchase(wish_id):
    wish = LibraryStateTracker().purchase_wish(wish_id)
    return jsonify({'message': 'Wish marked as purchased', 'wish': wish.to_dict()})
