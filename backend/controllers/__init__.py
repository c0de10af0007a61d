"""Controllers package"""
from .material_controller import material_bp
from .category_controller import category_bp
from .health_controller import health_bp
from .file_controller import spa_bp

__all__ = ['material_bp', 'category_bp', 'health_bp', 'spa_bp']
