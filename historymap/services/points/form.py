"""Validation of the point creation form filled in by the historian."""
from pydantic import ValidationError, field_validator, model_validator
from typing import Any, Dict, Optional

from historymap.core.exceptions import PointValidationError
from historymap.schemas.base import CamelModel
from historymap.services.points.coordinates import parse_coordinate

INVALID_COORDINATES = "Invalid coordinates. Use numbers (e.g. -30.885, -55.510)."


class PointForm(CamelModel):
    """
    Submitted form values. Required text is trimmed, optional text becomes
    None when blank. An instance only exists when the form is valid; build
    it with ``PointForm.parse`` to get the form's own error message.
    """

    name: str = ""
    lat: str = ""
    lon: str = ""
    description: Optional[str] = None
    address: Optional[str] = None
    neighborhood: Optional[str] = None
    type_id: Optional[str] = None
    parent_id: Optional[str] = None

    @field_validator("name", "lat", "lon", mode="before")
    @classmethod
    def strip_required(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", "address", "neighborhood", "type_id", "parent_id", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    @model_validator(mode="after")
    def check_required(self):
        # Checked in this order so the historian sees one message at a time
        if not self.name:
            raise ValueError("Point name is required.")
        if not self.lat or not self.lon:
            raise ValueError("Latitude and longitude are required.")
        if parse_coordinate(self.lat) is None or parse_coordinate(self.lon) is None:
            raise ValueError(INVALID_COORDINATES)
        return self

    @classmethod
    def parse(cls, **fields: Any) -> "PointForm":
        """Validate form fields, raising PointValidationError with the first problem."""
        try:
            return cls(**fields)
        except ValidationError as exc:
            error = exc.errors()[0]
            cause = (error.get("ctx") or {}).get("error")
            field = ".".join(str(loc) for loc in error["loc"]) or None
            raise PointValidationError(str(cause) if cause else error["msg"], field=field) from exc

    def to_payload(self) -> Dict[str, Any]:
        """Backend payload with parsed coordinates and camelCase ids."""
        return {
            "name": self.name,
            "description": self.description,
            "lat": parse_coordinate(self.lat),
            "lon": parse_coordinate(self.lon),
            "address": self.address,
            "neighborhood": self.neighborhood,
            "typeId": self.type_id,
            "parentId": self.parent_id,
        }
