"""
User model - placeholder creator attached to materials
"""
import uuid
from datetime import datetime
from . import db


class User(db.Model):
    """
    User model - a single default user owns every material (no authorization)
    """
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(255), nullable=False, unique=True)
    name = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    materials = db.relationship('Material', back_populates='user', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
        }

    def __repr__(self):
        return f'<User {self.id}: {self.email}>'
