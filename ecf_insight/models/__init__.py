"""Pydantic models for ECF records and derived aggregates."""

from ecf_insight.models.aggregates import Event, OpponentStats, RatingPoint
from ecf_insight.models.game import Game, GameScore, GameType
from ecf_insight.models.player import OfficialRating, PlayerDetails, PlayerSummary

__all__ = [
    "Event",
    "Game",
    "GameScore",
    "GameType",
    "OfficialRating",
    "OpponentStats",
    "PlayerDetails",
    "PlayerSummary",
    "RatingPoint",
]
