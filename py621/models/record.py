"""Base record model."""

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """Any entity returned by a listing endpoint, identified by its id.

    The pagination layer only relies on ``id``; everything else is specific
    to the record type.
    """

    id: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True, extra="ignore")
