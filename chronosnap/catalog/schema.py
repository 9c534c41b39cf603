"""
Purpose:
- Pydantic models for the scene catalog so the API is self-documenting and stable.
- Icons are a closed enum; unknown keys fall back to MAP_PIN instead of failing.
"""

from __future__ import annotations
from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

CUSTOM_SCENE_ID = "custom"
CUSTOM_SCENE_NAME = "Otro Lugar"

class Icon(str, Enum):
    LANDMARK = "Landmark"
    CROWN = "Crown"
    SAILBOAT = "Sailboat"
    PALETTE = "Palette"
    SHIP = "Ship"
    BOOK = "Book"
    BUILDING = "Building"
    COFFEE = "Coffee"
    TRAIN = "Train"
    MUSIC = "Music"
    CAR = "Car"
    MOUNTAIN = "Mountain"
    TREES = "Trees"
    SUN = "Sun"
    SHOPPING_BAG = "ShoppingBag"
    MIC = "Mic"
    DUMBBELL = "Dumbbell"
    MAP_PIN = "MapPin"

    @classmethod
    def default(cls) -> "Icon":
        return cls.MAP_PIN

    @classmethod
    def from_key(cls, key: "str | Icon | None") -> "Icon":
        """Total lookup: any unknown or empty key resolves to the default icon."""
        if isinstance(key, Icon):
            return key
        try:
            return cls(key)
        except ValueError:
            return cls.default()

class Scene(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    display_name: str
    generation_prompt: str = Field(..., min_length=1)
    icon: Icon = Icon.MAP_PIN

    @field_validator("icon", mode="before")
    @classmethod
    def _resolve_icon(cls, v):
        return Icon.from_key(v)

    @classmethod
    def cataloged(cls, id: str, display_name: str, prompt: str, icon: str) -> "Scene":
        return cls(id=id, display_name=display_name, generation_prompt=prompt, icon=icon)

    @classmethod
    def custom(cls, prompt: str) -> "Scene":
        """Ad-hoc scene for user free text; same shape as a cataloged one."""
        return cls(
            id=CUSTOM_SCENE_ID,
            display_name=CUSTOM_SCENE_NAME,
            generation_prompt=prompt,
            icon=Icon.default(),
        )

class Era(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    scenes: Tuple[Scene, ...] = ()
