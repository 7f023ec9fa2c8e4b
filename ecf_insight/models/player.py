"""Player models for ECF API responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlayerDetails(BaseModel):
    """Player record returned by the ``players/code`` endpoint."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    ecf_code: str = Field(..., alias="ECF_code", description="ECF player code")
    full_name: str = Field(..., description="Full name, 'Surname, Forename'")
    club_name: str | None = Field(None, description="Primary club")
    nation: str | None = Field(None, description="FIDE nation")
    gender: str | None = Field(None, description="Gender")

    @property
    def display_name(self) -> str:
        """Name in 'Forename Surname' order."""
        surname, _, forename = self.full_name.partition(",")
        forename = forename.strip()
        return f"{forename} {surname.strip()}" if forename else surname.strip()


class PlayerSummary(BaseModel):
    """One hit of the ``players/name`` search endpoint."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    full_name: str = Field(..., description="Full name, 'Surname, Forename'")
    ecf_code: str = Field(..., alias="ECF_code", description="ECF player code")
    club_name: str | None = Field(None, description="Primary club")

    @property
    def sort_key(self) -> tuple[str, str]:
        """(surname, forename) for alphabetical listings."""
        surname, _, forename = self.full_name.partition(",")
        return surname.strip(), forename.strip()


class OfficialRating(BaseModel):
    """Published rating returned by the ``ratings`` endpoint."""

    model_config = ConfigDict(extra="ignore")

    success: bool = Field(default=False, description="Whether the API found a rating")
    revised_rating: int | None = Field(None, description="Current published rating")
    revised_category: str | None = Field(None, description="Rating category ('P' = provisional)")
    original_rating: int | None = Field(None, description="Rating before revision")

    @field_validator("revised_rating", "original_rating", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_provisional(self) -> bool:
        return self.revised_category == "P"
