from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path

import pandas as pd
import regex  # type: ignore

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class CorpusConfig:
    lowercase: bool = False
    strip_accents: bool = False
    normalize_whitespace: bool = False


def clean_corpus(text: str, config: CorpusConfig | None = None) -> str:
    """Optional normalization applied before training.

    The defaults leave the text untouched, so the model sees the corpus as is.
    """

    cfg = config or CorpusConfig()
    s = text

    if cfg.lowercase:
        s = s.lower()

    if cfg.strip_accents:
        s = regex.sub(r"\p{Mn}+", "", unicodedata.normalize("NFKD", s))

    if cfg.normalize_whitespace:
        # Newlines and tabs become single spaces, which generation treats as word breaks.
        s = _WHITESPACE_RE.sub(" ", s).strip()

    return s


def load_corpus(path: str | Path, *, encoding: str = "utf-8", config: CorpusConfig | None = None) -> str:
    with open(path, "r", encoding=encoding, newline="") as f:
        text = f.read()
    logger.debug("Read %d characters from %s", len(text), path)
    return clean_corpus(text, config)


def load_corpus_csv(path: str | Path, column: str = "text", *, config: CorpusConfig | None = None) -> str:
    """Join one text column of a CSV file into a single corpus, rows separated by spaces."""

    df = pd.read_csv(path)
    if column not in df.columns:
        raise ValueError(f"CSV must have a column named {column!r}")
    text = " ".join(df[column].dropna().astype(str).tolist())
    logger.debug("Read %d rows (%d characters) from %s", len(df), len(text), path)
    return clean_corpus(text, config)
