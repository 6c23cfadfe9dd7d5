import pytest
from pydantic import ValidationError

from food_ordering.core.config import BUNDLED_DATASET, EnvironmentMode, Settings, get_settings


def test_env_mode_is_case_insensitive():
    settings = Settings(_env_file=None, env_mode="STAGING")

    assert settings.env_mode is EnvironmentMode.STAGING
    assert settings.use_real_services is True


def test_invalid_env_mode_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, env_mode="qa")


def test_development_needs_no_appwrite_config():
    settings = Settings(_env_file=None, env_mode="development")

    assert settings.is_development is True
    assert settings.validate_production_config() == []


def test_production_reports_missing_credentials():
    settings = Settings(_env_file=None, env_mode="production", appwrite_project_id="proj")

    missing = settings.validate_production_config()

    assert "APPWRITE_API_KEY" in missing
    assert "APPWRITE_PROJECT_ID" not in missing


def test_collections_are_wiped_in_fixed_order():
    settings = Settings(_env_file=None, menu_collection_id="menu_items")

    assert settings.catalog_collection_ids == [
        "categories",
        "customizations",
        "menu_items",
        "menu_customizations",
    ]


def test_endpoint_trailing_slash_is_stripped():
    settings = Settings(_env_file=None, appwrite_endpoint="https://appwrite.test/v1/")

    assert settings.appwrite_endpoint == "https://appwrite.test/v1"


def test_dataset_defaults_to_bundled_file(tmp_path):
    assert Settings(_env_file=None).resolved_dataset_path == BUNDLED_DATASET

    custom = tmp_path / "catalog.json"
    assert Settings(_env_file=None, dataset_path=custom).resolved_dataset_path == custom


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("BUCKET_ID", "images")
    get_settings.cache_clear()

    assert get_settings().bucket_id == "images"
