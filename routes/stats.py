from flask import Blueprint, request, jsonify, current_app
from datetime import datetime

from services.stats_service import StatisticsAggregator

bp = Blueprint('stats', __name__, url_prefix='/api/stats')


def get_aggregator():
    return StatisticsAggregator(streak_window_days=current_app.config.get('STREAK_WINDOW_DAYS'))


@bp.route('/')
def index():
    aggregator = get_aggregator()
    return jsonify({
        'overview': aggregator.overview(),
        'recent_activity': aggregator.recent_activity(current_app.config.get('RECENT_ACTIVITY_LIMIT', 5)),
    })


@bp.route('/category-distribution')
def category_distribution():
    return jsonify(get_aggregator().category_distribution())


@bp.route('/reading-progress')
def reading_progress():
    year = request.args.get('year', datetime.now().year, type=int)
    return jsonify(get_aggregator().monthly_reading_progress(year))


@bp.route('/top-authors')
def top_authors():
    default_limit = current_app.config.get('TOP_AUTHORS_LIMIT', 10)
    limit = request.args.get('limit', default_limit, type=int)
    if limit < 1:
        limit = default_limit
    return jsonify(get_aggregator().top_authors(limit))


@bp.route('/achievements')
def achievements():
    return jsonify(get_aggregator().achievements())
