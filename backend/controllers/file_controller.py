"""
File Controller - serves the built single-page front end (production only)
"""
import os

from flask import Blueprint, send_from_directory, current_app
from utils import error_response, not_found

spa_bp = Blueprint('spa', __name__)


def _dist_dir():
    return current_app.config['STATIC_DIST_DIR']


@spa_bp.route('/', defaults={'path': ''}, methods=['GET'])
@spa_bp.route('/<path:path>', methods=['GET'])
def serve_frontend(path):
    """
    GET /{path} - Serve a static asset, falling back to index.html for client-side routes

    Unknown /api/ paths answer with a JSON 404 instead of the front end.
    """
    if path == 'api' or path.startswith('api/'):
        return error_response('API_NOT_FOUND', 'API endpoint not found', 404)

    try:
        file_dir = _dist_dir()

        # Check if directory exists
        if not os.path.isdir(file_dir):
            return not_found('File')

        # Serve the asset if it exists
        if path and os.path.isfile(os.path.join(file_dir, path)):
            return send_from_directory(file_dir, path)

        if not os.path.isfile(os.path.join(file_dir, 'index.html')):
            return not_found('File')

        return send_from_directory(file_dir, 'index.html')

    except Exception as e:
        current_app.logger.exception("Error serving front end")
        return error_response('SERVER_ERROR', str(e), 500)
