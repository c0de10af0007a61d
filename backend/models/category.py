"""
Category model - department/subject a material is filed under
"""
import uuid
from datetime import datetime
from . import db


class Category(db.Model):
    """
    Category model - `name` is the subject code shown to clients (e.g. CSE)
    """
    __tablename__ = 'categories'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(100), nullable=False, unique=True)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    materials = db.relationship('Material', back_populates='category', lazy='dynamic')

    def to_dict(self, material_count=None):
        """Convert to dictionary"""
        data = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
        }
        if material_count is not None:
            data['materialCount'] = material_count
        return data

    def __repr__(self):
        return f'<Category {self.id}: {self.name}>'
