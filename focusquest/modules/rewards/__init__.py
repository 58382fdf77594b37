from focusquest.modules.rewards.deterministic import SeededRandom, stable_hash

__all__ = ["SeededRandom", "stable_hash"]
