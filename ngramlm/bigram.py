"""
Add-δ Bigram Language Models

Both models here blend a smoothed conditional bigram estimate with an
unigram estimate that floors unseen words to a single count:

    P(w|v) = λ * (count(v, w) + δ) / (count(v) + S*δ)
           + (1 - λ) * count'(w) / (N + 1)

where N is the total word count (one start token per sentence included)
and count'(w) is the unigram count raised to UNSEEN_WORD_FLOOR for unseen
words. The models differ in the scale S and the weight λ.
"""

import logging
import random
from abc import abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

from .corpus import START_TOKEN, STOP_TOKEN, UNK_TOKEN, add_stop_marker
from .counter import ConditionalCounter, SparseCounter
from .model import LanguageModel, roulette_select
from .smoothing import UNSEEN_WORD_FLOOR, AdditiveSmoothing, LinearInterpolation, floor_unseen


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BigramState:
    word_counts: SparseCounter
    bigram_counts: ConditionalCounter
    total_words: float
    total_bigrams: float
    vocabulary: float


class BigramModel(LanguageModel):
    """Shared training, querying and sampling for the bigram models."""

    DEFAULT_DELTA = 0.001
    DEFAULT_WEIGHTS: Tuple[float, float] = (0.5, 0.5)

    def __init__(self, delta: float = DEFAULT_DELTA,
                 weights: Optional[Sequence[float]] = None,
                 unseen_word_floor: float = UNSEEN_WORD_FLOOR,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None):
        """
        Args:
            delta: Additive smoothing constant for the bigram term
            weights: (bigram weight, unigram weight), summing to 1
            unseen_word_floor: Count credited to unseen words in the unigram term
            rng: Random source for sampling and ``check_model``
            seed: Seed for a new random source, used when ``rng`` is None
        """
        super().__init__(rng=rng, seed=seed)
        self.smoother = AdditiveSmoothing(delta)
        self.interpolation = LinearInterpolation(
            weights if weights is not None else self.DEFAULT_WEIGHTS
        )
        if len(self.interpolation.weights) != 2:
            raise ValueError("bigram models take exactly two interpolation weights")
        if unseen_word_floor <= 0:
            raise ValueError(f"unseen_word_floor must be positive, got {unseen_word_floor}")
        self.unseen_word_floor = unseen_word_floor

    def _build_state(self, sentences: Iterable[Sequence[str]]) -> BigramState:
        word_counts = SparseCounter()
        bigram_counts = ConditionalCounter()

        for sentence in sentences:
            word_counts.increment(START_TOKEN, 1.0)
            prev_word = START_TOKEN
            for word in add_stop_marker(sentence):
                word_counts.increment(word, 1.0)
                bigram_counts.increment(prev_word, word, 1.0)
                prev_word = word

        state = BigramState(
            word_counts=word_counts,
            bigram_counts=bigram_counts,
            total_words=word_counts.total_count(),
            total_bigrams=bigram_counts.total_count(),
            vocabulary=word_counts.size() + 1,
        )
        logger.debug(
            "total_words=%s total_bigrams=%s vocabulary=%s",
            state.total_words, state.total_bigrams, state.vocabulary
        )
        return state

    def _describe_state(self, state: BigramState) -> Dict:
        return {
            'delta': self.smoother.delta,
            'weights': list(self.interpolation.weights),
            'vocab_size': state.word_counts.size(),
            'total_words': state.total_words,
            'total_bigrams': state.total_bigrams,
            'unique_bigrams': sum(
                state.bigram_counts.context_counter(c).size()
                for c in state.bigram_counts.contexts()
            ),
        }

    @abstractmethod
    def _smoothing_scale(self, state: BigramState) -> float:
        """Multiplier of δ in the bigram term's denominator."""
        pass

    def probability(self, word: str, prev_word: str) -> float:
        """Probability of ``word`` following ``prev_word``."""
        state = self._require_state()

        joint_count = state.bigram_counts.get_count(prev_word, word)
        prev_count = state.word_counts.get_count(prev_word)
        this_word_count = floor_unseen(state.word_counts.get_count(word), self.unseen_word_floor)

        bigram_estimate = self.smoother.smooth(
            joint_count, prev_count, self._smoothing_scale(state)
        )
        unigram_estimate = this_word_count / (state.total_words + 1)
        return self.interpolation.combine(bigram_estimate, unigram_estimate)

    def word_probability(self, sentence: Sequence[str], index: int) -> float:
        word = sentence[index]
        prev_word = START_TOKEN if index == 0 else sentence[index - 1]
        return self.probability(word, prev_word)

    def generate_word(self, prev_word: str = START_TOKEN,
                      rng: Optional[random.Random] = None) -> str:
        """
        Sample the word following ``prev_word`` from the observed bigram
        counts (roulette wheel). An unseen context falls back to the unigram
        counts without the start token. UNK_TOKEN is returned if the walk
        runs out.
        """
        state = self._require_state()
        rng = rng or self.rng

        continuations = state.bigram_counts.context_counter(prev_word)
        if continuations.total_count() > 0:
            word = roulette_select(
                continuations.items(), continuations.total_count(), rng.random()
            )
            return word if word is not None else UNK_TOKEN

        total = state.total_words - state.word_counts.get_count(START_TOKEN)
        if total <= 0:
            return STOP_TOKEN
        weighted = ((w, c) for w, c in state.word_counts.items() if w != START_TOKEN)
        word = roulette_select(weighted, total, rng.random())
        return word if word is not None else UNK_TOKEN

    def _next_word(self, history: Sequence[str], rng: random.Random) -> str:
        prev_word = history[-1] if history else START_TOKEN
        return self.generate_word(prev_word, rng)


class AddDeltaBigramModel(BigramModel):
    """
    Bigram model with a 50/50 blend and δ scaled by the total word count.

    P(w|v) = 0.5 * (count(v, w) + δ) / (count(v) + N*δ) + 0.5 * count'(w) / (N + 1)

    The blend is not normalized over the vocabulary, so ``check_model``
    performs no real verification and always reports 1.0.
    """

    @property
    def name(self) -> str:
        return "Add-δ Bigram"

    def _smoothing_scale(self, state: BigramState) -> float:
        return state.total_words

    def check_model(self) -> float:
        self._require_state()
        return 1.0


class InterpolatedBigramModel(BigramModel):
    """
    Bigram model with a 70/30 blend and δ scaled by the vocabulary size.

    P(w|v) = 0.7 * (count(v, w) + δ) / (count(v) + V*δ) + 0.3 * count'(w) / (N + 1)
    """

    DEFAULT_WEIGHTS = (0.7, 0.3)

    @property
    def name(self) -> str:
        return "Interpolated Add-δ Bigram"

    def _smoothing_scale(self, state: BigramState) -> float:
        return state.vocabulary

    def check_model(self) -> float:
        """
        Spot-check one context.

        Picks a context word uniformly at random from the vocabulary and
        sums P(w|context) over the words observed after it. The result
        falls short of 1 by the mass left to unobserved continuations.
        """
        state = self._require_state()
        vocab = state.word_counts.keys()
        if not vocab:
            return 0.0

        context = vocab[self.rng.randrange(len(vocab))]
        continuations = state.bigram_counts.context_counter(context)
        return sum(self.probability(word, context) for word in continuations.keys())
