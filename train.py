#!/usr/bin/env python3
"""
N-gram Language Model Training Script

Train a smoothed n-gram model on the Brown corpus (or a text file), report
held-out perplexity and print sampled sentences.

Usage:
    python train.py --model trigram --categories news --seed 13
    python train.py --model bigram --corpus-file data/train.txt --samples 10
    python train.py --model unigram --param delta=0.05
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

from ngramlm.corpus import get_brown_categories
from ngramlm.registry import ModelType
from ngramlm.training import (
    console, evaluate_model_cli, sample_sentences_cli, setup_logging, train_model_cli
)


logger = logging.getLogger(__name__)


def parse_params(items: Optional[List[str]]) -> Dict[str, object]:
    """
    Parse repeated ``KEY=VALUE`` options into model keyword arguments.

    Values holding commas become tuples of floats (interpolation weights),
    everything else becomes a float.
    """
    params: Dict[str, object] = {}
    for item in items or []:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {item!r}")
        key = key.strip().replace('-', '_')
        if ',' in value:
            params[key] = tuple(float(v) for v in value.split(','))
        else:
            params[key] = float(value)
    return params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Train a smoothed n-gram language model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --model trigram --categories news fiction
  %(prog)s --model interpolated_bigram --param delta=0.002 --param weights=0.8,0.2
  %(prog)s --model unigram --corpus-file corpus.txt --samples 10

Available models:
  unigram             - Add-δ unigram (δ=0.01)
  bigram              - Add-δ bigram, 50/50 blend with floored unigram
  interpolated_bigram - Add-δ bigram, 70/30 blend with floored unigram
  trigram             - Trigram backing off to bigram and unigram
        """
    )

    parser.add_argument(
        '-m', '--model',
        type=str,
        default='trigram',
        choices=[t.value for t in ModelType],
        help='Language model to train (default: trigram)'
    )

    parser.add_argument(
        '-c', '--categories',
        type=str,
        nargs='+',
        default=None,
        help='Brown corpus categories to use (default: all)'
    )

    parser.add_argument(
        '-f', '--corpus-file',
        type=str,
        default=None,
        help='Plain text corpus, one sentence per line (overrides --categories)'
    )

    parser.add_argument(
        '--test-fraction',
        type=float,
        default=0.1,
        help='Share of sentences held out for perplexity (default: 0.1)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for the split, sampling and diagnostics'
    )

    parser.add_argument(
        '-n', '--samples',
        type=int,
        default=5,
        help='Number of sentences to sample after training (default: 5)'
    )

    parser.add_argument(
        '-p', '--param',
        action='append',
        default=None,
        metavar='KEY=VALUE',
        help='Smoothing parameter passed to the model, e.g. delta=0.01 (repeatable)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: WARNING)'
    )

    parser.add_argument(
        '--list-categories',
        action='store_true',
        help='List available Brown corpus categories and exit'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.list_categories:
        console.print("Available Brown corpus categories:")
        for cat in get_brown_categories():
            console.print(f"  - {cat}")
        return 0

    try:
        params = parse_params(args.param)
        model, test_sentences = train_model_cli(
            model_type=args.model,
            categories=args.categories,
            corpus_file=args.corpus_file,
            test_fraction=args.test_fraction,
            seed=args.seed,
            params=params
        )
        evaluate_model_cli(model, test_sentences)
        if args.samples > 0:
            sample_sentences_cli(model, count=args.samples)
    except (OSError, LookupError, ValueError, TypeError) as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
