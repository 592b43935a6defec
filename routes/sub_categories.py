from flask import Blueprint, jsonify

from services.catalog import SUB_CATEGORIES
from services.errors import NotFoundError

bp = Blueprint('sub_categories', __name__, url_prefix='/api/sub-categories')


@bp.route('/')
def index():
    return jsonify(SUB_CATEGORIES)


@bp.route('/<path:category>')
def for_category(category):
    if category not in SUB_CATEGORIES:
        raise NotFoundError('Category not found')

    return jsonify([
        {'name': sub_category, 'value': sub_category}
        for sub_category in SUB_CATEGORIES[category]
    ])
