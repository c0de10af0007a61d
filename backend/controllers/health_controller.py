"""
Health Controller - liveness and database connectivity probes
"""
import logging
from datetime import datetime, timezone

from flask import Blueprint, jsonify

from services.material_store import get_material_store

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """GET /health - Liveness probe"""
    return jsonify({
        'status': 'ok',
        'message': 'Study Material Hub API is running',
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })


@health_bp.route('/health/db', methods=['GET'])
def health_check_db():
    """GET /health/db - Database connectivity probe"""
    try:
        get_material_store().ping()
        return jsonify({
            'status': 'ok',
            'database': 'connected'
        })
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return jsonify({
            'status': 'error',
            'database': 'disconnected',
            'error': str(e)
        }), 500
