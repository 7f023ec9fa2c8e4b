"""Derived aggregates computed from a batch of games.

These are rebuilt from scratch for every batch and never persisted.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from ecf_insight.models.game import Game


class Event(BaseModel):
    """Games of one competition, with their date span and performance rating."""

    model_config = ConfigDict(frozen=True)

    event_code: str | None = Field(None, description="Event identifier")
    event_name: str | None = Field(None, description="Name taken from the first member game")
    games: tuple[Game, ...] = Field(default=(), description="Member games in input order")
    start_date: date = Field(..., description="Earliest member game date")
    end_date: date = Field(..., description="Latest member game date")
    performance_rating: int = Field(default=0, description="Performance over all member games")

    @property
    def game_count(self) -> int:
        return len(self.games)


class OpponentStats(BaseModel):
    """Head-to-head tally against one opponent."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Opponent display name")
    opponent_no: str | None = Field(None, description="First opponent code seen for this key")
    opponent_codes: tuple[str, ...] = Field(
        default=(), description="Every distinct opponent code grouped under this key"
    )
    total_games: int = Field(default=0, description="Games played")
    wins: int = Field(default=0, description="Games won")
    losses: int = Field(default=0, description="Games lost")
    draws: int = Field(default=0, description="Games drawn")
    games: tuple[Game, ...] = Field(default=(), description="Contributing games")

    @property
    def is_ambiguous(self) -> bool:
        """True when distinct players share this display name."""
        return len(self.opponent_codes) > 1


class RatingPoint(BaseModel):
    """One point of the rating-over-time series."""

    model_config = ConfigDict(frozen=True)

    game_date: date
    rating: int
