import uuid
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import Column, String, Text, DateTime, Uuid
from .database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Cocktail(Base):
    """Cocktail record - name, ingredients and recipe are required, image and comment optional"""
    __tablename__ = "cocktails"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    ingredients = Column(Text, nullable=False)
    recipe = Column(Text, nullable=False)
    image = Column(String, nullable=True)  # external URL or /uploads/... path
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    @property
    def to_schema(self):
        """Convert Cocktail model to the wire dictionary format"""
        return {
            "_id": str(self.id),
            "theCock": self.name,
            "theIngredients": self.ingredients,
            "theRecipe": self.recipe,
            "theJpeg": self.image,
            "theComment": self.comment,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def parse_cocktail_id(raw: str) -> Optional[uuid.UUID]:
    """Return the UUID for a well-formed identifier, None otherwise."""
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError):
        return None
