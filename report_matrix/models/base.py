"""Base model configuration for parsed report data."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model with standard configuration.

    Report documents carry many fields the comparison never looks at
    (tags, hooks, embeddings, ...); they are ignored rather than rejected.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")
