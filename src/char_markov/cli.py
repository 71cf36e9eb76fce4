#!/usr/bin/env python3
"""
Command-line entry point for char-markov.

Trains a character-level Markov model on a corpus file and prints generated
text to stdout. Log messages go to stderr.

Usage:
    char-markov 3 "The" 200 fixed corpus.txt
    char-markov 5 "Once upon" 500 random corpus.txt --normalize-whitespace
    char-markov 4 "good" 120 fixed reviews.csv --csv-column text --show-model
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import DEFAULT_MAX_STEPS, ModelConfig
from .corpus import CorpusConfig, load_corpus, load_corpus_csv
from .model import MarkovModel

logger = logging.getLogger(__name__)

DEFAULT_FIXED_SEED = 20


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="char-markov",
        description="Generate text with a character-level Markov model",
    )

    parser.add_argument("window_length", type=int, help="Context size in characters")
    parser.add_argument("initial_text", help="Seed text; its last window_length characters start generation")
    parser.add_argument("text_length", type=int, help="Minimum length of the generated text")
    parser.add_argument(
        "mode",
        choices=["random", "fixed"],
        help="'fixed' uses a fixed seed for reproducible output, 'random' seeds from system entropy",
    )
    parser.add_argument("corpus", help="Path to the training corpus")

    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_FIXED_SEED,
        help=f"Seed used in fixed mode (default: {DEFAULT_FIXED_SEED})",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=DEFAULT_MAX_STEPS,
        help="Maximum number of characters sampled in one run",
    )
    parser.add_argument(
        "--csv-column",
        type=str,
        help="Treat the corpus as CSV and train on this column",
    )
    parser.add_argument(
        "--normalize-whitespace",
        action="store_true",
        help="Collapse runs of whitespace in the corpus to single spaces",
    )
    parser.add_argument(
        "--show-model",
        action="store_true",
        help="Print the trained model table before the generated text",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    return parser


def _train(model: MarkovModel, args: argparse.Namespace) -> None:
    corpus_config = CorpusConfig(normalize_whitespace=args.normalize_whitespace)

    if args.csv_column:
        model.train(load_corpus_csv(args.corpus, args.csv_column, config=corpus_config))
    elif args.normalize_whitespace:
        model.train(load_corpus(args.corpus, config=corpus_config))
    else:
        model.train_file(args.corpus)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        config = ModelConfig(
            window_length=args.window_length,
            seed=args.seed if args.mode == "fixed" else None,
            max_steps=args.max_steps,
        )
    except ValueError as e:
        parser.error(str(e))

    model = MarkovModel.from_config(config)

    try:
        _train(model, args)
    except (OSError, ValueError) as e:
        logger.error("Training failed: %s", e)
        return 1

    if args.show_model:
        print(model.to_frame().to_string(index=False))
        print()

    print(model.generate(args.initial_text, args.text_length))
    return 0


if __name__ == "__main__":
    sys.exit(main())
