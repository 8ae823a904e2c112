from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from database import Base
from constants import RecipeLimits


class EntityBase(Base):
    """
    Abstract base for persisted entities.

    The id is a required, database-generated integer primary key. It is
    assigned when the row is inserted (on flush or commit) and never
    reassigned by the application.
    """
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)


class Recipe(EntityBase):
    __tablename__ = 'recipes'

    label = Column(String(RecipeLimits.LABEL_MAX_LENGTH), nullable=False)
    ingredients = Column(Text, nullable=False, default='')  # Free text, e.g. "Flour, Eggs, Milk"
    instructions = Column(Text, nullable=False, default='')  # Free text, e.g. "Step 1, Step 2"
    calories = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("calories >= 0", name='ck_recipes_calories_non_negative'),
    )

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, label={self.label})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "ingredients": self.ingredients,
            "instructions": self.instructions,
            "calories": self.calories,
        }
