"""Ranking key for "top matches" queries."""


def score(created_at: int, ranking_score: float | None = None) -> float:
    """Combine recency and text-match quality into one ordering key.

    ``ranking_score`` is the engine's normalized 0..1 match quality; absent
    scores count as 0.
    """
    # TODO: replace with a validated relevance/recency blend.
    return created_at * (1 + (ranking_score or 0))
