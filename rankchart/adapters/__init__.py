from .normalize import coerce_day, coerce_rank, normalize_observations

__all__ = ["coerce_day", "coerce_rank", "normalize_observations"]
