"""Pytest fixtures for seeder, backend and session tests."""

import httpx
import pytest

from food_ordering.core.config import Settings, get_settings
from food_ordering.schemas import CatalogDataset
from food_ordering.seed import CatalogSeeder
from food_ordering.services.backend import MockBackendService, reset_backend_service
from food_ordering.services.images import ImageRehoster
from food_ordering.services.session import reset_session_provider

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


def image_handler(request: httpx.Request) -> httpx.Response:
    """Serves a PNG for every URL except those with "broken" in the path."""
    if "broken" in request.url.path:
        return httpx.Response(404)
    return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})


@pytest.fixture(autouse=True)
def development_mode(monkeypatch):
    """Every test starts from fresh development-mode factories."""
    monkeypatch.setenv("ENV_MODE", "development")
    get_settings.cache_clear()
    reset_backend_service()
    reset_session_provider()
    yield
    get_settings.cache_clear()
    reset_backend_service()
    reset_session_provider()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        env_mode="development",
        database_id="db",
        categories_collection_id="categories",
        customizations_collection_id="customizations",
        menu_collection_id="menu",
        menu_customizations_collection_id="menu_customizations",
        bucket_id="assets",
    )


@pytest.fixture
def backend():
    return MockBackendService(base_url="https://mock.appwrite.test/v1")


@pytest.fixture
def image_client():
    return httpx.AsyncClient(transport=httpx.MockTransport(image_handler))


@pytest.fixture
def rehoster(backend, settings, image_client):
    return ImageRehoster(backend, settings.bucket_id, http_client=image_client)


@pytest.fixture
def seeder(backend, settings, rehoster):
    return CatalogSeeder(backend, settings, rehoster)


@pytest.fixture
def dataset():
    return CatalogDataset.model_validate({
        "categories": [
            {"name": "Burgers", "description": "Juicy grilled burgers"},
            {"name": "Pizzas", "description": "Oven-baked cheesy pizzas"},
        ],
        "customizations": [
            {"name": "Extra Cheese", "price": 25, "type": "topping"},
            {"name": "Fries", "price": 35, "type": "side"},
            {"name": "Coke", "price": 30, "type": "side"},
        ],
        "menu": [
            {
                "name": "Classic Cheeseburger",
                "description": "Beef patty, cheese, lettuce, tomato",
                "image_url": "https://images.example.com/menu/cheeseburger.png",
                "price": 25.99,
                "rating": 4.5,
                "calories": 550,
                "protein": 25,
                "category_name": "Burgers",
                "customizations": ["Extra Cheese", "Fries"],
            },
            {
                "name": "Pepperoni Pizza",
                "description": "Loaded with cheese and pepperoni slices",
                "image_url": "https://images.example.com/menu/pepperoni.png",
                "price": 30.99,
                "rating": 4.7,
                "calories": 700,
                "protein": 30,
                "category_name": "Pizzas",
                "customizations": ["Extra Cheese", "Coke"],
            },
        ],
    })


def menu_item(name, category_name="Burgers", image_url=None, customizations=()):
    """Raw menu item dict for building datasets inside tests."""
    return {
        "name": name,
        "description": f"{name} description",
        "image_url": image_url or f"https://images.example.com/menu/{name.lower().replace(' ', '-')}.png",
        "price": 10,
        "rating": 4,
        "calories": 300,
        "protein": 10,
        "category_name": category_name,
        "customizations": list(customizations),
    }


@pytest.fixture
def make_item():
    return menu_item


@pytest.fixture
def png_bytes():
    return PNG_BYTES
