"""Database models package"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from .user import User
from .category import Category
from .material import Material, MATERIAL_TYPES, SEMESTER_RANGE

__all__ = ['db', 'User', 'Category', 'Material', 'MATERIAL_TYPES', 'SEMESTER_RANGE']
