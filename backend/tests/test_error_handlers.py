import pytest
from fastapi import HTTPException

from exceptions import (
    ApplicationError,
    ConfigurationError,
    DatabaseError,
    RecordNotFoundError,
    ValidationError,
)
from utils.error_handlers import handle_api_errors


@pytest.mark.parametrize(
    "error,status_code",
    (
        (RecordNotFoundError("Recipe", 3), 404),
        (ValidationError("bad label", {"label": "blank"}), 400),
        (ConfigurationError("no database url", ["RECIPES_DB_URL"]), 400),
        (DatabaseError("create_recipe", "disk I/O error"), 500),
        (ApplicationError("something broke"), 500),
        (RuntimeError("unexpected"), 500),
    ),
)
@pytest.mark.asyncio
async def test_async_errors_map_to_status(error: Exception, status_code: int) -> None:
    @handle_api_errors("Get recipe")
    async def endpoint():
        raise error

    with pytest.raises(HTTPException) as exc_info:
        await endpoint()

    assert exc_info.value.status_code == status_code


def test_sync_not_found_keeps_message() -> None:
    @handle_api_errors("Get recipe")
    def endpoint():
        raise RecordNotFoundError("Recipe", 3)

    with pytest.raises(HTTPException) as exc_info:
        endpoint()

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Recipe with id 3 not found"


def test_unexpected_error_hides_details() -> None:
    @handle_api_errors("List recipes")
    def endpoint():
        raise KeyError("secret")

    with pytest.raises(HTTPException) as exc_info:
        endpoint()

    assert "secret" not in exc_info.value.detail
    assert exc_info.value.detail.startswith("List recipes failed.")


def test_http_exception_passes_through() -> None:
    @handle_api_errors("Delete recipe")
    def endpoint():
        raise HTTPException(status_code=409, detail="conflict")

    with pytest.raises(HTTPException) as exc_info:
        endpoint()

    assert exc_info.value.status_code == 409


@pytest.mark.asyncio
async def test_return_value_is_untouched() -> None:
    @handle_api_errors("Health")
    async def endpoint():
        return {"status": "ok"}

    assert await endpoint() == {"status": "ok"}
