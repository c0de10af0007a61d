"""
Material model - stores catalogued study resources (PDF or video links)
"""
import uuid
from datetime import datetime
from . import db
from utils.view_model import to_view_model

MATERIAL_TYPES = ('PDF', 'VIDEO')
SEMESTER_RANGE = (1, 8)


class Material(db.Model):
    """
    Material model - represents a single study resource
    """
    __tablename__ = 'materials'
    __table_args__ = (
        db.CheckConstraint("type IN ('PDF', 'VIDEO')", name='ck_materials_type'),
        db.CheckConstraint('semester >= 1 AND semester <= 8', name='ck_materials_semester'),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    file_url = db.Column(db.String(2048), nullable=False)  # Exposed to clients as `link`
    type = db.Column(db.String(10), nullable=False)  # PDF|VIDEO
    tags = db.Column(db.JSON, nullable=False, default=list)
    author = db.Column(db.String(255), nullable=False)
    semester = db.Column(db.Integer, nullable=False)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    category_id = db.Column(db.String(36), db.ForeignKey('categories.id'), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    # Relationships
    user = db.relationship('User', back_populates='materials')
    category = db.relationship('Category', back_populates='materials', lazy='joined')

    def to_dict(self):
        """Convert to the client view-model"""
        return to_view_model(self)

    def __repr__(self):
        return f'<Material {self.id}: {self.title} ({self.type}, sem {self.semester})>'
