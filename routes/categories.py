from flask import Blueprint, request, jsonify
from sqlalchemy import func
import logging

from models import db, Book, Category
from forms.category_forms import CategoryForm, CategoryUpdateForm
from services.errors import ConflictError
from services.stats_service import StatisticsAggregator

logger = logging.getLogger(__name__)

bp = Blueprint('categories', __name__, url_prefix='/api/categories')

# Palette for auto-assigning category colors
CATEGORY_COLORS = [
    '#3B82F6',  # Blue
    '#10B981',  # Green
    '#8B5CF6',  # Purple
    '#F59E0B',  # Amber
    '#EF4444',  # Red
    '#6366F1',  # Indigo
    '#14B8A6',  # Teal
    '#EC4899',  # Pink
    '#F97316',  # Orange
    '#64748B',  # Slate
]


def get_next_color():
    """Get the next color from the palette based on existing categories."""
    used_colors = {c for (c,) in db.session.query(Category.color).all()}

    for color in CATEGORY_COLORS:
        if color not in used_colors:
            return color

    return CATEGORY_COLORS[len(used_colors) % len(CATEGORY_COLORS)]


def name_taken(name, exclude_id=None):
    query = Category.query.filter(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


@bp.route('/')
def index():
    """List all categories with their book counts."""
    rows = db.session.query(
        Category,
        func.count(Book.id).label('book_count')
    ).outerjoin(Book, Book.category_id == Category.id).group_by(Category.id).order_by(Category.name).all()

    return jsonify([
        dict(category.to_dict(), book_count=book_count)
        for category, book_count in rows
    ])


@bp.route('/distribution')
def distribution():
    return jsonify(StatisticsAggregator().category_distribution())


@bp.route('/<int:category_id>')
def detail(category_id):
    category = db.get_or_404(Category, category_id, description='Category not found')
    books = category.books.order_by(Book.title).all()
    return jsonify(dict(category.to_dict(), books=[book.to_dict() for book in books]))


@bp.route('/<int:category_id>/books')
def books(category_id):
    category = db.get_or_404(Category, category_id, description='Category not found')
    subcategory = request.args.get('subcategory', '').strip() or None

    summary, category_books = StatisticsAggregator().category_summary(category, subcategory)
    return jsonify({
        'category': summary,
        'books': [book.to_dict() for book in category_books],
    })


@bp.route('/', methods=['POST'])
def create():
    form = CategoryForm.from_json()
    data = form.cleaned_data()

    if name_taken(data['name']):
        raise ConflictError('Category name already exists')

    category = Category(
        name=data['name'],
        color=data['color'] or get_next_color(),
        description=data['description'],
    )
    db.session.add(category)
    db.session.commit()

    logger.info(f"Created category {category.id}: {category.name}")
    return jsonify(category.to_dict()), 201


@bp.route('/<int:category_id>', methods=['PUT'])
def update(category_id):
    category = db.get_or_404(Category, category_id, description='Category not found')
    form = CategoryUpdateForm.from_json()
    data = form.cleaned_data(partial=True)

    if 'name' in data and name_taken(data['name'], exclude_id=category_id):
        raise ConflictError('Category name already exists')

    for name, value in data.items():
        setattr(category, name, value)
    db.session.commit()

    return jsonify(category.to_dict())


@bp.route('/<int:category_id>', methods=['DELETE'])
def delete(category_id):
    category = db.get_or_404(Category, category_id, description='Category not found')

    if category.book_count > 0:
        raise ConflictError('Cannot delete category that has books assigned to it')

    name = category.name
    db.session.delete(category)
    db.session.commit()

    logger.info(f"Deleted category {category_id}: {name}")
    return jsonify({'message': 'Category deleted successfully'})
