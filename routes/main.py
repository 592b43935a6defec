import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

bp = Blueprint('main', __name__, url_prefix='/api')


@bp.route('/health')
def health():
    return jsonify({
        'status': 'OK',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'uptime': round(time.time() - current_app.config['STARTED_AT'], 3),
    })
