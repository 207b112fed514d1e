"""
Add-δ Unigram Language Model
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence

from .corpus import STOP_TOKEN, UNK_TOKEN, add_stop_marker
from .counter import SparseCounter
from .model import LanguageModel, roulette_select
from .smoothing import AdditiveSmoothing


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnigramState:
    word_counts: SparseCounter
    total: float
    vocabulary: float


class AddDeltaUnigramModel(LanguageModel):
    """
    Unigram model with additive smoothing.

    P(w) = (count(w) + δ) / (total + V*δ)

    A stop token is appended to every training sentence and counted like
    any other word. V is the number of distinct words plus one slot for
    the unseen word, so the observed words and the unseen slot together
    carry exactly all of the probability mass.
    """

    DEFAULT_DELTA = 0.01

    def __init__(self, delta: float = DEFAULT_DELTA,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None):
        super().__init__(rng=rng, seed=seed)
        self.smoother = AdditiveSmoothing(delta)

    @property
    def name(self) -> str:
        return "Add-δ Unigram"

    def _build_state(self, sentences: Iterable[Sequence[str]]) -> UnigramState:
        word_counts = SparseCounter()
        for sentence in sentences:
            for word in add_stop_marker(sentence):
                word_counts.increment(word, 1.0)

        total = word_counts.total_count()
        vocabulary = word_counts.size() + 1
        logger.debug(
            "total=%s vocabulary=%s unseen-word probability=%s",
            total, vocabulary, self.smoother.unseen(total, vocabulary)
        )
        return UnigramState(word_counts=word_counts, total=total, vocabulary=vocabulary)

    def _describe_state(self, state: UnigramState) -> Dict:
        return {
            'delta': self.smoother.delta,
            'vocab_size': state.word_counts.size(),
            'total_words': state.total,
        }

    def probability(self, word: str) -> float:
        """Smoothed probability of ``word``."""
        state = self._require_state()
        return self.smoother.smooth(
            state.word_counts.get_count(word), state.total, state.vocabulary
        )

    def word_probability(self, sentence: Sequence[str], index: int) -> float:
        return self.probability(sentence[index])

    def check_model(self) -> float:
        """
        Sum the probability of every observed word (stop token included)
        plus the single unseen word. Should be 1.0 up to rounding.
        """
        state = self._require_state()
        total = sum(self.probability(word) for word in state.word_counts.keys())
        return total + self.smoother.unseen(state.total, state.vocabulary)

    def generate_word(self, rng: Optional[random.Random] = None) -> str:
        """
        Sample a word from the unsmoothed unigram distribution.

        A uniform sample in [0, 1) is drawn, then the vocabulary is walked
        accumulating count/total until the sum passes the sample. If the
        walk runs out, UNK_TOKEN is returned. A model trained on no words
        only ever produces the stop token.
        """
        state = self._require_state()
        if state.total == 0:
            return STOP_TOKEN
        rng = rng or self.rng
        word = roulette_select(state.word_counts.items(), state.total, rng.random())
        return word if word is not None else UNK_TOKEN

    def _next_word(self, history: Sequence[str], rng: random.Random) -> str:
        return self.generate_word(rng)

