"""Board generation and display-data services."""

from .generator import BoardGenerator
from .sampler import RandomSampler
from .sentences import CATALOG, SentenceCatalog

__all__ = ["CATALOG", "BoardGenerator", "RandomSampler", "SentenceCatalog"]
