import sys
import uuid
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import pytest
from database import ApiDbContext, ContextOptions, dispose_engine
from models import Recipe


@pytest.fixture
def context_options():
    """Named in-memory database unique to one test"""
    options = ContextOptions.in_memory(f"test_{uuid.uuid4().hex}")
    yield options
    dispose_engine(options)


@pytest.fixture
def db_context(context_options):
    """Context over an in-memory database with the schema created"""
    context = ApiDbContext(context_options)
    context.ensure_created()
    yield context
    context.close()


@pytest.fixture
def make_recipe():
    """Build an unsaved Recipe with generated values; keyword overrides win"""
    def factory(**overrides) -> Recipe:
        token = uuid.uuid4().hex[:8]
        values = {
            "label": f"Recipe {token}",
            "ingredients": f"Ingredient {token}, Salt, Pepper",
            "instructions": f"Step 1 {token}, Step 2, Step 3",
            "calories": 350,
        }
        values.update(overrides)
        return Recipe(**values)
    return factory
