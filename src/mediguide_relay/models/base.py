"""
Base model for MediGuide relay data structures.

Upstream payloads are owned by Google and the model output is free-form, so
unknown fields are ignored rather than rejected.
"""

from pydantic import BaseModel, ConfigDict


class BaseRelayModel(BaseModel):
    """Base model for all relay and client data structures."""

    model_config = ConfigDict(
        # Enable validation on assignment
        validate_assignment=True,
        # Upstream APIs add fields without notice
        extra="ignore",
        # Accept both field names and aliases on input
        populate_by_name=True,
    )
