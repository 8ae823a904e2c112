import pytest
from pydantic import ValidationError
from sqlalchemy import Integer

from models import EntityBase, Recipe
from schemas import RecipeUpdate


class TestEntityBase:

    def test_id_is_assigned_after_persistence(self, db_context, make_recipe):
        recipe = make_recipe()
        assert recipe.id is None

        db_context.recipes.add(recipe)
        db_context.save_changes()

        assert recipe.id is not None

    def test_id_is_required_generated_primary_key(self):
        id_column = Recipe.__table__.c.id

        assert id_column.primary_key is True
        assert id_column.nullable is False
        assert id_column.autoincrement is True
        assert isinstance(id_column.type, Integer)

    def test_entity_base_is_abstract(self):
        assert EntityBase.__abstract__ is True
        assert not hasattr(EntityBase, '__table__')

    def test_ids_are_unique_per_insert(self, db_context, make_recipe):
        first, second = make_recipe(), make_recipe()
        db_context.recipes.add_range([first, second])
        db_context.save_changes()

        assert first.id != second.id


class TestRecipe:

    def test_label_is_set(self, make_recipe):
        recipe = make_recipe()
        recipe.label = "Test Recipe"
        assert recipe.label == "Test Recipe"

    def test_ingredients_are_set(self, make_recipe):
        recipe = make_recipe()
        recipe.ingredients = "Ingredient1, Ingredient2, Ingredient3"
        assert recipe.ingredients == "Ingredient1, Ingredient2, Ingredient3"

    def test_instructions_are_set(self, make_recipe):
        recipe = make_recipe()
        recipe.instructions = "Step 1, Step 2, Step 3"
        assert recipe.instructions == "Step 1, Step 2, Step 3"

    def test_calories_are_set(self, make_recipe):
        recipe = make_recipe()
        recipe.calories = 500
        assert recipe.calories == 500

    def test_generated_recipe_has_values(self, make_recipe):
        recipe = make_recipe()

        assert recipe is not None
        assert recipe.label.strip()
        assert recipe.ingredients is not None
        assert recipe.instructions is not None

    def test_fields_update_independently(self, make_recipe):
        recipe = make_recipe(calories=120)

        recipe.label = "Lentil soup"
        recipe.ingredients = "Lentils, Onion"
        recipe.instructions = "Simmer"

        assert recipe.label == "Lentil soup"
        assert recipe.ingredients == "Lentils, Onion"
        assert recipe.instructions == "Simmer"
        assert recipe.calories == 120

    def test_persisted_values_round_trip(self, context_options, db_context, make_recipe):
        recipe = make_recipe(label="Pancakes", ingredients="Flour, Eggs, Milk", calories=420)
        db_context.recipes.add(recipe)
        db_context.save_changes()

        from database import ApiDbContext
        with ApiDbContext(context_options) as other:
            loaded = other.recipes.find(recipe.id)

        assert loaded is not recipe
        assert loaded.to_dict() == recipe.to_dict()

    def test_repr_shows_id_and_label(self, make_recipe):
        recipe = make_recipe(id=7, label="Flapjack")
        assert repr(recipe) == "<Recipe(id=7, label=Flapjack)>"

    def test_columns_match_schema(self):
        assert set(Recipe.__table__.c.keys()) == {
            "id", "label", "ingredients", "instructions", "calories"
        }
        assert Recipe.__tablename__ == "recipes"


class TestRecipeUpdate:

    def test_omitted_fields_are_unset(self):
        update = RecipeUpdate(calories=120)
        assert update.model_dump(exclude_unset=True) == {"calories": 120}

    @pytest.mark.parametrize("field", ("label", "ingredients", "instructions", "calories"))
    def test_explicit_null_is_rejected(self, field):
        with pytest.raises(ValidationError):
            RecipeUpdate.model_validate({field: None})

    def test_blank_label_is_rejected(self):
        with pytest.raises(ValidationError):
            RecipeUpdate(label="  ")
