"""Pydantic schemas for screen data."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Screen(BaseModel):
    """A screen (auditorium) owned by a theatre owner."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    screen_number: int | str = Field(
        validation_alias=AliasChoices("screenNumber", "screen_number")
    )
    name: str | None = None
    screen_type: str | None = Field(
        default=None, validation_alias=AliasChoices("type", "screenType", "screen_type")
    )

    @property
    def screen_id(self) -> str:
        """Identifier used in booking API paths."""
        return str(self.screen_number)
