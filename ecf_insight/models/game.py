"""Game models."""

from datetime import date
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

_RATING = TypeAdapter(int)
_INCREMENT = TypeAdapter(float)


class GameType(str, Enum):
    """Rating category a game is played under."""

    STANDARD = "Standard"
    RAPID = "Rapid"
    BLITZ = "Blitz"

    @property
    def rating_code(self) -> str:
        """Single-letter code used by the ECF ratings endpoint."""
        return self.value[0]


class GameScore(IntEnum):
    """Outcome code as reported by the ECF (5 means a half point)."""

    LOSS = 0
    WIN = 1
    DRAW = 5

    @property
    def points(self) -> float:
        """Points scored by the player."""
        if self is GameScore.DRAW:
            return 0.5
        return float(self.value)

    @property
    def label(self) -> str:
        return {GameScore.WIN: "1", GameScore.LOSS: "0", GameScore.DRAW: "½"}[self]


class Game(BaseModel):
    """
    One rated game result from a player's ECF game history.

    Records are immutable; derived lists are always new sequences.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    game_date: date = Field(..., description="Date the game was played")
    score: GameScore = Field(..., description="Outcome code: 1 win, 0 loss, 5 draw")
    opponent_name: str = Field(..., min_length=1, description="Opponent display name")
    opponent_no: str | None = Field(None, description="Opponent ECF code")
    opponent_rating: int | None = Field(None, description="Opponent rating at time of game")
    player_rating: int | None = Field(None, description="Player rating after the game")
    increment: float | None = Field(None, description="Rating increment attached by the ECF")
    colour: str | None = Field(None, description="Side played")
    event_code: str | None = Field(None, description="Event identifier")
    event_name: str | None = Field(None, description="Event name")
    id: str | None = Field(None, description="Synthetic identifier, unique within one batch")

    @field_validator("opponent_no", "colour", "event_code", "event_name", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """The API sends empty strings for unknown values."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("opponent_no", "event_code", mode="before")
    @classmethod
    def code_to_str(cls, v: Any) -> Any:
        """Codes occasionally arrive as bare numbers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("score", mode="before")
    @classmethod
    def numeric_score(cls, v: Any) -> Any:
        """Only numeric outcome codes count; ``True`` or ``"1"`` are not results."""
        if isinstance(v, GameScore):
            return v
        if isinstance(v, bool) or not isinstance(v, int | float):
            raise ValueError(f"score must be numeric, got {v!r}")
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v

    @field_validator("opponent_rating", "player_rating", mode="before")
    @classmethod
    def unparsable_rating_to_none(cls, v: Any) -> int | None:
        """Ratings the API sends as blanks, placeholders or fractions are unknown."""
        if v is None:
            return None
        try:
            return _RATING.validate_python(v)
        except ValidationError:
            return None

    @field_validator("increment", mode="before")
    @classmethod
    def unparsable_increment_to_none(cls, v: Any) -> float | None:
        if v is None:
            return None
        try:
            return _INCREMENT.validate_python(v)
        except ValidationError:
            return None
