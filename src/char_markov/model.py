"""
Character-level Markov Model

A fixed-order model: every context of `window_length` characters seen in the
training corpus maps to a `FrequencyTable` of the characters that followed it.
Generation extends a seed text one sampled character at a time.

Usage:
    model = MarkovModel(window_length=3, seed=20)
    model.train_file("corpus.txt")
    text = model.generate("The", 200)
"""

from __future__ import annotations

import logging
from itertools import chain, islice
from pathlib import Path
from typing import Dict, Iterator, List, Optional, TextIO, Union

import numpy as np
import pandas as pd

from .config import DEFAULT_MAX_STEPS, ModelConfig
from .frequency import FrequencyTable

logger = logging.getLogger(__name__)

_READ_CHUNK = 64 * 1024

FRAME_COLUMNS = ["context", "character", "count", "p", "cp"]


def _iter_chars(corpus: Union[str, TextIO]) -> Iterator[str]:
    """Yield the corpus one character at a time."""
    if isinstance(corpus, str):
        return iter(corpus)
    if not hasattr(corpus, "read"):
        raise TypeError("corpus must be a str or a readable text stream")
    chunks = iter(lambda: corpus.read(_READ_CHUNK), "")
    return chain.from_iterable(chunks)


def _make_rng(seed: Optional[int]) -> np.random.Generator:
    """Random stream for any integer seed.

    numpy only accepts non-negative seeds, so a negative seed is spawned on
    its own branch of the seed sequence for its absolute value.
    """
    if seed is None or seed >= 0:
        return np.random.default_rng(seed)
    return np.random.default_rng(np.random.SeedSequence(-seed, spawn_key=(1,)))


class MarkovModel:
    """
    Fixed-order character Markov model.

    The model is write-once: `train` is called a single time, after which
    `generate` may be called any number of times. The random stream belongs
    to the instance, so two models built with the same seed and trained on
    the same corpus produce identical text.

    Attributes:
        window_length: Number of characters in every context
        max_steps: Upper bound on characters sampled by one `generate` call
    """

    def __init__(
        self,
        window_length: int,
        seed: Optional[int] = None,
        *,
        max_steps: int = DEFAULT_MAX_STEPS,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize an untrained model.

        Args:
            window_length: Context size in characters
            seed: Any integer for reproducible output; None seeds from system entropy
            max_steps: Bound on sampled characters per `generate` call
            rng: Explicit random stream; takes precedence over `seed`
        """
        config = ModelConfig(window_length=window_length, seed=seed, max_steps=max_steps)

        self.window_length = config.window_length
        self.max_steps = config.max_steps
        self._rng = rng if rng is not None else _make_rng(config.seed)
        self._tables: Dict[str, FrequencyTable] = {}
        self._trained = False

    @classmethod
    def from_config(cls, config: ModelConfig) -> "MarkovModel":
        return cls(config.window_length, config.seed, max_steps=config.max_steps)

    # Training

    def train(self, corpus: Union[str, TextIO]) -> None:
        """
        Build the model from a corpus.

        A corpus shorter than `window_length + 1` characters leaves the model
        empty. Read errors from a stream propagate to the caller and leave
        the model untrained.

        Args:
            corpus: The training text, or a readable text stream
        """
        if self._trained:
            raise RuntimeError("model has already been trained")

        chars = _iter_chars(corpus)
        window = "".join(islice(chars, self.window_length))
        tables: Dict[str, FrequencyTable] = {}
        observed = 0

        if len(window) == self.window_length:
            for c in chars:
                table = tables.get(window)
                if table is None:
                    table = tables[window] = FrequencyTable()
                table.update(c)
                window = window[1:] + c
                observed += 1

        for table in tables.values():
            table.finalize()

        self._tables = tables
        self._trained = True

        if not tables:
            logger.info("Corpus shorter than window length %d; model is empty", self.window_length)
        else:
            logger.info(
                "Trained on %d transitions across %d contexts (window length %d)",
                observed,
                len(tables),
                self.window_length,
            )

    def train_file(self, path: Union[str, Path], encoding: str = "utf-8") -> None:
        """Train from a text file, streaming it in chunks."""
        try:
            with open(path, "r", encoding=encoding, newline="") as f:
                self.train(f)
        except OSError as e:
            logger.error("Could not read corpus %s: %s", path, e)
            raise

    # Generation

    def sample_next(self, context: str) -> str:
        """
        Draw the character that follows `context`.

        Raises:
            KeyError: if `context` was never seen in training
        """
        table = self._tables[context]
        return table.pick(self._rng.random())

    def generate(self, seed_text: str, target_length: int) -> str:
        """
        Extend `seed_text` until it is at least `target_length` characters
        long and ends with a space.

        Generation stops early when the current context was never seen in
        training, and after `max_steps` sampled characters. A seed text
        shorter than the window is returned unchanged.

        Args:
            seed_text: Text to start from; returned verbatim as the prefix
            target_length: Minimum desired output length

        Returns:
            The seed text followed by the generated characters
        """
        if len(seed_text) < self.window_length:
            return seed_text

        context = seed_text[-self.window_length:]
        out: List[str] = list(seed_text)
        steps = 0

        while len(out) < target_length or out[-1] != " ":
            if context not in self._tables:
                logger.debug("Stopped at unseen context %r after %d steps", context, steps)
                break
            if steps >= self.max_steps:
                logger.warning(
                    "Generation stopped after max_steps=%d without reaching a trailing space",
                    self.max_steps,
                )
                break
            c = self.sample_next(context)
            out.append(c)
            context = context[1:] + c
            steps += 1

        return "".join(out)

    # Inspection

    @property
    def is_trained(self) -> bool:
        return self._trained

    @property
    def contexts(self) -> List[str]:
        return list(self._tables)

    def table(self, context: str) -> FrequencyTable:
        return self._tables[context]

    def __contains__(self, context: object) -> bool:
        return context in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def to_frame(self) -> pd.DataFrame:
        """One row per (context, character) with its count, p and cp."""
        rows = [
            {
                "context": context,
                "character": stat.character,
                "count": stat.count,
                "p": stat.p,
                "cp": stat.cp,
            }
            for context, table in self._tables.items()
            for stat in table
        ]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

    def __str__(self) -> str:
        return "".join(f"{context} : {table}\n" for context, table in self._tables.items())
