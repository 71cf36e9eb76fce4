"""Character-level Markov text generation.

Run the examples under `scripts/` or the `char-markov` command.
"""

from .config import ModelConfig
from .corpus import CorpusConfig, clean_corpus, load_corpus, load_corpus_csv
from .frequency import FALLBACK_CHAR, CharacterStat, FrequencyTable
from .model import MarkovModel

__version__ = "1.0.0"

__all__ = [
    "CharacterStat",
    "CorpusConfig",
    "FALLBACK_CHAR",
    "FrequencyTable",
    "MarkovModel",
    "ModelConfig",
    "clean_corpus",
    "load_corpus",
    "load_corpus_csv",
]
