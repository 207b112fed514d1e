"""
Corpus Loading and Preprocessing

This module defines the sentence-boundary tokens shared by every model and
handles loading corpora (the Brown corpus or a plain text file) as lists
of tokenized sentences.
"""

import logging
import random
import string
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import nltk
from nltk.corpus import brown


logger = logging.getLogger(__name__)

# Special tokens
START_TOKEN = "<S>"
STOP_TOKEN = "</S>"
UNK_TOKEN = "*UNKNOWN*"


def ensure_nltk_data():
    """Download the Brown corpus if it is not installed yet."""
    try:
        nltk.data.find('corpora/brown')
    except LookupError:
        logger.info("Downloading Brown corpus...")
        nltk.download('brown', quiet=True)


def add_stop_marker(tokens: Sequence[str]) -> List[str]:
    """Return a copy of ``tokens`` with the stop token appended."""
    return list(tokens) + [STOP_TOKEN]


def add_sentence_markers(tokens: Sequence[str]) -> List[str]:
    """
    Add start and stop markers to a sentence.

    Args:
        tokens: List of tokens in the sentence

    Returns:
        Tokens with one start marker in front and one stop marker behind
    """
    return [START_TOKEN] + list(tokens) + [STOP_TOKEN]


def preprocess_text(text: str, lowercase: bool = True,
                    remove_punctuation: bool = False) -> List[str]:
    """
    Preprocess a line of raw text into a list of tokens.

    Args:
        text: Raw input text
        lowercase: Whether to lowercase the text
        remove_punctuation: Whether to remove punctuation

    Returns:
        List of preprocessed tokens
    """
    if lowercase:
        text = text.lower()

    if remove_punctuation:
        text = text.translate(str.maketrans('', '', string.punctuation))

    return text.split()


def load_brown_corpus(categories: Optional[List[str]] = None,
                      lowercase: bool = True,
                      min_sentence_length: int = 1) -> Tuple[List[List[str]], dict]:
    """
    Load the Brown corpus and return preprocessed sentences.

    Args:
        categories: Optional list of Brown corpus categories to load
                   (e.g., ['news', 'fiction']). If None, loads all categories.
        lowercase: Whether to lowercase the text
        min_sentence_length: Minimum number of words in a sentence

    Returns:
        Tuple of (list of sentences as token lists, corpus statistics dict)
    """
    ensure_nltk_data()

    if categories:
        sents = brown.sents(categories=categories)
    else:
        sents = brown.sents()

    processed_sentences = []
    total_tokens = 0

    for sent in sents:
        tokens = [w.lower() if lowercase else w for w in sent]

        if len(tokens) >= min_sentence_length:
            processed_sentences.append(tokens)
            total_tokens += len(tokens)

    stats = {
        'num_sentences': len(processed_sentences),
        'total_tokens': total_tokens,
        'categories': categories or brown.categories()
    }
    logger.debug("Loaded Brown corpus: %s", stats)

    return processed_sentences, stats


def get_brown_categories() -> List[str]:
    """Return list of available Brown corpus categories."""
    ensure_nltk_data()
    return brown.categories()


def load_text_corpus(path: str, lowercase: bool = True,
                     min_sentence_length: int = 1) -> Tuple[List[List[str]], dict]:
    """
    Load a plain text corpus with one whitespace-tokenized sentence per line.

    Returns:
        Tuple of (sentences, corpus statistics dict)
    """
    path = Path(path)

    sentences = []
    total_tokens = 0
    with open(path, encoding='utf-8') as f:
        for line in f:
            tokens = preprocess_text(line, lowercase=lowercase)
            if len(tokens) >= min_sentence_length:
                sentences.append(tokens)
                total_tokens += len(tokens)

    stats = {
        'num_sentences': len(sentences),
        'total_tokens': total_tokens,
        'source': str(path)
    }
    logger.debug("Loaded text corpus: %s", stats)

    return sentences, stats


def split_corpus(sentences: List[List[str]], test_fraction: float = 0.1,
                 rng: Optional[random.Random] = None) -> Tuple[List[List[str]], List[List[str]]]:
    """
    Shuffle and split sentences into training and held-out portions.

    Args:
        sentences: Tokenized sentences
        test_fraction: Share of sentences kept for testing, in [0, 1)
        rng: Random source used for shuffling (a fresh one if None)

    Returns:
        Tuple of (train sentences, test sentences)
    """
    if not 0 <= test_fraction < 1:
        raise ValueError(f"test_fraction must be in [0, 1), got {test_fraction}")

    rng = rng or random.Random()
    shuffled = list(sentences)
    rng.shuffle(shuffled)

    num_test = int(len(shuffled) * test_fraction)
    return shuffled[num_test:], shuffled[:num_test]
