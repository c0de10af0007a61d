"""
Category Controller - subject codes known to the catalog
"""
import logging

from flask import Blueprint

from services.material_store import get_material_store
from utils import success_response, server_error

logger = logging.getLogger(__name__)

category_bp = Blueprint('categories', __name__, url_prefix='/api/categories')


@category_bp.route('', methods=['GET'])
def list_categories():
    """
    GET /api/categories - List categories with their material counts
    """
    try:
        rows = get_material_store().list_categories()
        categories = [category.to_dict(material_count=count) for category, count in rows]
        return success_response({
            "categories": categories,
            "count": len(categories)
        })
    except Exception as e:
        logger.exception("Error fetching categories")
        return server_error("Failed to fetch categories", e)
