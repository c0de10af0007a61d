"""
Material Controller - list, create and delete study materials
"""
import logging

from flask import Blueprint, request

from services.material_filters import parse_filters
from services.material_store import get_material_store
from services.material_validation import validate_material_payload
from utils import success_response, not_found, bad_request, server_error, validation_error

logger = logging.getLogger(__name__)

material_bp = Blueprint('materials', __name__, url_prefix='/api/materials')


def _error_from_info(error_info: dict):
    info = dict(error_info)
    code = info.pop('code')
    message = info.pop('message')
    return validation_error(code, message, **info)


@material_bp.route('', methods=['GET'])
def list_materials():
    """
    GET /api/materials - List materials, newest first

    Query params (all optional):
        - searchQuery: case-insensitive substring of title or description
        - subject: exact subject code
        - semester: integer semester
        - type: PDF | VIDEO | ALL

    Returns:
        List of materials in client view-model shape
    """
    filters, error = parse_filters(request.args)
    if error:
        return _error_from_info(error)

    try:
        materials = get_material_store().list_materials(filters)
        materials_list = [material.to_dict() for material in materials]

        return success_response({
            "materials": materials_list,
            "count": len(materials_list)
        })

    except Exception as e:
        logger.exception("Error fetching materials")
        return server_error("Failed to fetch materials", e)


@material_bp.route('', methods=['POST'])
def create_material():
    """
    POST /api/materials - Create a material

    Request body (JSON):
    {
        "title": "Data Structures",
        "description": "optional",
        "link": "https://...",
        "type": "PDF",
        "author": "...",
        "semester": 3,
        "subject": "CSE",
        "tags": ["trees", "graphs"]
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return bad_request("Request body must be a JSON object")

    payload, error = validate_material_payload(data)
    if error:
        return _error_from_info(error)

    try:
        material = get_material_store().create_material(payload)
        return success_response(material.to_dict(), message="Material created", status_code=201)

    except Exception as e:
        logger.exception("Error creating material")
        return server_error("Failed to create material", e)


@material_bp.route('/<material_id>', methods=['DELETE'])
def delete_material(material_id):
    """
    DELETE /api/materials/{material_id} - Hard delete a material
    """
    try:
        deleted = get_material_store().delete_material(material_id)
    except Exception as e:
        logger.exception("Error deleting material %s", material_id)
        return server_error("Failed to delete material", e)

    if not deleted:
        logger.warning("Delete requested for unknown material %s", material_id)
        return not_found('Material')

    return '', 204
