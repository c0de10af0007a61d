"""
Material store - the storage client shared by the endpoint layer

Created once by the application factory and reached through
`current_app.extensions['material_store']`.
"""
import logging
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy import func, text

from models import db, User, Category, Material
from .material_filters import MaterialFilters

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'material_store'


class MaterialStore:
    """
    Storage operations for materials, categories and the default user.

    Lifecycle:
        open()  - verify the database is reachable (raises on failure)
        close() - dispose of the engine's connection pool
    """

    def __init__(self, database=None, default_user_email: str = 'default@example.com',
                 default_user_name: str = 'Default User'):
        self.db = database or db
        self.default_user_email = default_user_email
        self.default_user_name = default_user_name
        self.is_open = False

    @classmethod
    def from_config(cls, config) -> 'MaterialStore':
        return cls(
            default_user_email=config.get('DEFAULT_USER_EMAIL', 'default@example.com'),
            default_user_name=config.get('DEFAULT_USER_NAME', 'Default User'),
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self):
        self.ping()
        self.is_open = True
        logger.info("Successfully connected to the database")

    def close(self):
        if not self.is_open:
            return
        self.db.session.remove()
        self.db.engine.dispose()
        self.is_open = False
        logger.info("Database connection closed")

    def ping(self):
        """Run a trivial query; raises if the database is unreachable."""
        self.db.session.execute(text('SELECT 1'))

    # ------------------------------------------------------------------
    # Materials
    # ------------------------------------------------------------------

    def list_materials(self, filters: Optional[MaterialFilters] = None) -> List[Material]:
        query = Material.query
        if filters is not None:
            query = filters.apply(query)
        return query.order_by(Material.created_at.desc(), Material.id.desc()).all()

    def get_material(self, material_id: str) -> Optional[Material]:
        return self.db.session.get(Material, material_id)

    def create_material(self, payload: Dict[str, Any]) -> Material:
        """
        Insert a validated material payload.

        Resolves (or creates) the default user and the subject's category in the
        same transaction; nothing is written if any step fails.
        """
        try:
            user = self.get_or_create_default_user()
            category = self.get_or_create_category(payload['subject'])
            material = Material(
                title=payload['title'],
                description=payload.get('description') or '',
                file_url=payload['link'],
                type=payload['type'],
                tags=list(payload.get('tags') or []),
                author=payload['author'],
                semester=payload['semester'],
                user=user,
                category=category,
            )
            self.db.session.add(material)
            self.db.session.commit()
        except Exception:
            self.db.session.rollback()
            raise

        logger.info("Created material %s (%s) in %s", material.id, material.type, category.name)
        return material

    def delete_material(self, material_id: str) -> bool:
        """Hard delete. Returns False when no material has this id."""
        material = self.get_material(material_id)
        if material is None:
            return False
        try:
            self.db.session.delete(material)
            self.db.session.commit()
        except Exception:
            self.db.session.rollback()
            raise
        logger.info("Deleted material %s", material_id)
        return True

    # ------------------------------------------------------------------
    # Users & categories
    # ------------------------------------------------------------------

    def get_or_create_default_user(self) -> User:
        """Flushes but does not commit; the caller owns the transaction."""
        user = User.query.filter_by(email=self.default_user_email).first()
        if user is None:
            user = User(email=self.default_user_email, name=self.default_user_name)
            self.db.session.add(user)
            self.db.session.flush()
            logger.info("Created default user %s", self.default_user_email)
        return user

    def get_or_create_category(self, name: str) -> Category:
        """Exact-name lookup; flushes but does not commit."""
        category = Category.query.filter_by(name=name).first()
        if category is None:
            category = Category(name=name, description=f"Category for {name}")
            self.db.session.add(category)
            self.db.session.flush()
            logger.info("Created category %s", name)
        return category

    def list_categories(self):
        """Return (category, material_count) pairs ordered by name."""
        rows = (
            self.db.session.query(Category, func.count(Material.id))
            .outerjoin(Material, Material.category_id == Category.id)
            .group_by(Category.id)
            .order_by(Category.name)
            .all()
        )
        return [(category, count) for category, count in rows]


def get_material_store() -> MaterialStore:
    """The store registered on the current application."""
    return current_app.extensions[EXTENSION_KEY]
