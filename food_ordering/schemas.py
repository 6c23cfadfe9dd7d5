"""
Pydantic Schemas for the Catalog Dataset and HTTP Responses

The static dataset the seeder loads is validated here before any remote
call is made, so a malformed file never triggers the destructive wipe.

Author: Khalil Bannouri
Version: 1.0.0
"""

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from food_ordering.core.config import get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================

class CustomizationType(str, Enum):
    TOPPING = "topping"
    SIDE = "side"
    SIZE = "size"
    CRUST = "crust"
    BREAD = "bread"
    SPICE = "spice"
    BASE = "base"
    SAUCE = "sauce"


# =============================================================================
# DATASET SCHEMAS
# =============================================================================

class Category(BaseModel):
    """A menu category, referenced by name from menu items."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Burgers"])
    description: str = Field(default="", max_length=500)


class Customization(BaseModel):
    """An add-on a menu item can be ordered with."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Extra Cheese"])
    price: float = Field(..., ge=0, examples=[25])
    type: str = Field(..., min_length=1, max_length=50, examples=["topping"])

    @property
    def known_type(self) -> Optional[CustomizationType]:
        """The matching CustomizationType, or None for a custom type."""
        try:
            return CustomizationType(self.type)
        except ValueError:
            return None


class MenuItem(BaseModel):
    """A menu item as described in the dataset (image_url is the source URL)."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Classic Cheeseburger"])
    description: str = Field(default="", max_length=1000)
    image_url: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    rating: float = Field(default=0, ge=0, le=5)
    calories: int = Field(default=0, ge=0)
    protein: int = Field(default=0, ge=0)
    category_name: str = Field(..., min_length=1)
    customizations: List[str] = Field(default_factory=list)


class CatalogDataset(BaseModel):
    """The full static dataset: categories, customizations and menu."""
    categories: List[Category] = Field(default_factory=list)
    customizations: List[Customization] = Field(default_factory=list)
    menu: List[MenuItem] = Field(default_factory=list)

    def expected_link_count(self) -> int:
        """Number of (item, customization) pairs that resolve to a customization."""
        known = {c.name for c in self.customizations}
        return sum(
            1
            for item in self.menu
            for name in item.customizations
            if name in known
        )


def load_dataset(path: Optional[Path] = None) -> CatalogDataset:
    """
    Load and validate a catalog dataset from a JSON file.

    Args:
        path: JSON file; defaults to the configured (or bundled) dataset

    Returns:
        CatalogDataset: Validated dataset

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the file does not match the schema
    """
    if path is None:
        path = get_settings().resolved_dataset_path

    path = Path(path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    dataset = CatalogDataset.model_validate(raw)

    logger.debug(
        f"Loaded dataset {path.name}: {len(dataset.categories)} categories, "
        f"{len(dataset.customizations)} customizations, {len(dataset.menu)} menu items"
    )
    return dataset


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    backend: str
    session_provider: str
    authenticated: bool
    environment: str
    timestamp: datetime
