"""
Smoothed N-gram Language Models

Unigram, bigram and trigram language models built on sparse count tables,
with additive smoothing, linear interpolation and back-off so that every
word, seen or not, receives non-zero probability.
"""

from .bigram import AddDeltaBigramModel, InterpolatedBigramModel
from .corpus import START_TOKEN, STOP_TOKEN, UNK_TOKEN, load_brown_corpus, load_text_corpus
from .counter import ConditionalCounter, SparseCounter
from .model import LanguageModel, ModelNotTrainedError
from .registry import ModelType, get_model
from .smoothing import UNSEEN_WORD_FLOOR
from .trigram import BackoffTrigramModel
from .unigram import AddDeltaUnigramModel

__version__ = "0.1.0"
__all__ = [
    "AddDeltaUnigramModel", "AddDeltaBigramModel", "InterpolatedBigramModel",
    "BackoffTrigramModel", "LanguageModel", "ModelNotTrainedError",
    "ModelType", "get_model", "SparseCounter", "ConditionalCounter",
    "START_TOKEN", "STOP_TOKEN", "UNK_TOKEN", "UNSEEN_WORD_FLOOR",
    "load_brown_corpus", "load_text_corpus",
]
