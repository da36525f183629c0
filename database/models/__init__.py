from .base import Base
from .match import MatchResult

__all__ = [
    'Base',
    'MatchResult',
]
