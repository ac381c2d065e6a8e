from .core.env import ENV, Env, get_env, pick

CURRENT_ENVIRONMENT = ENV

__all__ = [
    "CURRENT_ENVIRONMENT",
    "ENV",
    "Env",
    "get_env",
    "pick",
]
