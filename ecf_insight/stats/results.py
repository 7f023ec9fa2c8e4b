"""Best individual results."""

from collections.abc import Iterable

from ecf_insight.models.game import Game, GameScore


def comparison_score(game: Game) -> int:
    """Rank value of a result: a win counts 400 above a draw with the same opponent."""
    rating = game.opponent_rating or 0
    if game.score is GameScore.WIN:
        return rating + 400
    if game.score is GameScore.DRAW:
        return rating
    return 0


def best_results(games: Iterable[Game], limit: int = 3) -> list[Game]:
    """Top wins and draws by opponent strength. Losses never qualify."""
    candidates = [game for game in games if game.score in (GameScore.WIN, GameScore.DRAW)]
    candidates.sort(key=comparison_score, reverse=True)
    return candidates[: max(limit, 0)]
