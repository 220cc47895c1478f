from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from rentals import db

bp = Blueprint('main', __name__)


@bp.route('/health')
def health():
    """Health check endpoint

    Returns 200 OK if the database answers, 503 Service Unavailable otherwise.
    """
    try:
        db.session.execute(text('SELECT 1'))
        return jsonify({
            'status': 'healthy',
            'database': 'connected',
            'version': current_app.config['APP_VERSION']
        }), 200
    except Exception as e:
        current_app.logger.error(f'Health check failed: {e}')
        return jsonify({
            'status': 'unhealthy',
            'error': str(e),
            'database': 'disconnected'
        }), 503
