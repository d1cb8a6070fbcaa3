from .config import Config, GameRules

__all__ = ['Config', 'GameRules']
