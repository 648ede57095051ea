"""Base model configuration for all report data structures."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Frozen base model; records are never mutated while rendering."""

    model_config = ConfigDict(frozen=True)
