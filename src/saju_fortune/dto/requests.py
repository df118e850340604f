"""Request DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class FortuneRequest(BaseModel):
    """Request DTO for a fortune reading.

    Every field is optional at the schema level; emptiness and format are
    checked after normalization so the user gets a Korean message instead
    of a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, description="User name")
    birth_date: str | None = Field(
        None,
        alias="birthDate",
        description="Birth date, YYYY-MM-DD (also accepts 'YYYY. M. D.')",
    )
    birth_time: str | None = Field(
        None,
        alias="birthTime",
        description="Birth time, 24-hour HH:MM (also accepts '오전/오후 H:MM')",
    )
