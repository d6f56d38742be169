from typing import Literal

from pydantic import Field, field_validator

from .base import BaseRelayModel


class MedicineSuggestion(BaseRelayModel):
    """Search suggestion returned for a partial medicine name."""

    name: str = Field(description="Brand name")
    generic: str | None = Field(default=None, description="Generic name")


class MedicineDetails(BaseRelayModel):
    """Comprehensive medicine information, as requested by the system prompt."""

    name: str = Field(description="Medicine name")
    generic_name: str | None = Field(default=None, alias="genericName")
    active_ingredients: str | None = Field(default=None, alias="activeIngredients")
    indications: str | None = None
    dosage_forms: str | None = Field(default=None, alias="dosageForms")
    common_side_effects: str | None = Field(default=None, alias="commonSideEffects")
    contraindications: str | None = None
    manufacturer: str | None = None
    price_range: str | None = Field(default=None, alias="priceRange")
    warnings: str | None = None
    alternatives: list[str] = Field(default_factory=list)

    @field_validator(
        "active_ingredients",
        "indications",
        "dosage_forms",
        "common_side_effects",
        "contraindications",
        "manufacturer",
        "warnings",
        mode="before",
    )
    @classmethod
    def join_lists(cls, v):
        # The model sometimes answers with a list where a sentence was asked for
        if isinstance(v, list):
            return ", ".join(str(item) for item in v)
        return v

    @field_validator("alternatives", mode="before")
    @classmethod
    def wrap_single_alternative(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


class ChatMessage(BaseRelayModel):
    """A single chat bubble."""

    role: Literal["user", "assistant"]
    text: str
