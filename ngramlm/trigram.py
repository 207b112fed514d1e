"""
Back-off Trigram Language Model

Three estimates are kept, each smoothed with its own δ and each summing to
one over the observed vocabulary plus a single unseen word:

    P1(w)     = (count'(w) + δ1) / (N + F + V*δ1)
    P2(w|v)   = (count(v, w) + δ2) / (count(v, *) + V*δ2)
    P3(w|u,v) = (count(u, v, w) + δ3) / (count(u, v, *) + V*δ3)

count'(w) is the unigram count floored to F = UNSEEN_WORD_FLOOR for unseen
words, which is why F joins the unigram denominator. The prediction
backs off through them:

    count(u, v, *) > 0:  λ3*P3 + λ2*P2 + λ1*P1
    count(v, *) > 0:     μ2*P2 + μ1*P1
    otherwise:           P1
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .corpus import START_TOKEN, STOP_TOKEN, UNK_TOKEN, add_sentence_markers
from .counter import ConditionalCounter, SparseCounter
from .model import LanguageModel, roulette_select
from .smoothing import UNSEEN_WORD_FLOOR, AdditiveSmoothing, LinearInterpolation, floor_unseen


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrigramState:
    word_counts: SparseCounter
    bigram_counts: ConditionalCounter
    # prev-prev word -> (prev word -> word -> count)
    trigram_counts: Dict[str, ConditionalCounter]
    total_words: float
    total_bigrams: float
    total_trigrams: float
    vocabulary: float


class BackoffTrigramModel(LanguageModel):
    """
    Trigram model with interpolated back-off to bigram and unigram evidence.

    Training prepends one start token and appends one stop token to each
    sentence. At query time the first word is conditioned on
    (START, START), which backs off to the START bigram row, and the
    second on (START, first word).
    """

    DEFAULT_UNIGRAM_DELTA = 0.01
    DEFAULT_BIGRAM_DELTA = 0.001
    DEFAULT_TRIGRAM_DELTA = 0.001
    # (trigram, bigram, unigram)
    DEFAULT_TRIGRAM_WEIGHTS = (0.6, 0.3, 0.1)
    # (bigram, unigram), used when the trigram context was never seen
    DEFAULT_BIGRAM_WEIGHTS = (0.7, 0.3)

    def __init__(self, unigram_delta: float = DEFAULT_UNIGRAM_DELTA,
                 bigram_delta: float = DEFAULT_BIGRAM_DELTA,
                 trigram_delta: float = DEFAULT_TRIGRAM_DELTA,
                 trigram_weights: Optional[Sequence[float]] = None,
                 bigram_weights: Optional[Sequence[float]] = None,
                 unseen_word_floor: float = UNSEEN_WORD_FLOOR,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None):
        super().__init__(rng=rng, seed=seed)
        self.unigram_smoother = AdditiveSmoothing(unigram_delta)
        self.bigram_smoother = AdditiveSmoothing(bigram_delta)
        self.trigram_smoother = AdditiveSmoothing(trigram_delta)

        self.trigram_interpolation = LinearInterpolation(
            trigram_weights if trigram_weights is not None else self.DEFAULT_TRIGRAM_WEIGHTS
        )
        self.bigram_interpolation = LinearInterpolation(
            bigram_weights if bigram_weights is not None else self.DEFAULT_BIGRAM_WEIGHTS
        )
        if len(self.trigram_interpolation.weights) != 3:
            raise ValueError("trigram_weights takes exactly three weights")
        if len(self.bigram_interpolation.weights) != 2:
            raise ValueError("bigram_weights takes exactly two weights")

        if unseen_word_floor <= 0:
            raise ValueError(f"unseen_word_floor must be positive, got {unseen_word_floor}")
        self.unseen_word_floor = unseen_word_floor

    @property
    def name(self) -> str:
        return "Back-off Trigram"

    # -----------------------------------------------------------------------
    # Training

    def _build_state(self, sentences: Iterable[Sequence[str]]) -> TrigramState:
        word_counts = SparseCounter()
        bigram_counts = ConditionalCounter()
        trigram_counts: Dict[str, ConditionalCounter] = {}

        for sentence in sentences:
            marked = add_sentence_markers(sentence)
            length = len(marked)

            for i, word in enumerate(marked):
                if i <= length - 3:
                    bigram_counts.increment(word, marked[i + 1], 1.0)
                    inner = trigram_counts.setdefault(word, ConditionalCounter())
                    inner.increment(marked[i + 1], marked[i + 2], 1.0)
                elif i == length - 2:
                    bigram_counts.increment(word, marked[i + 1], 1.0)
                word_counts.increment(word, 1.0)

        state = TrigramState(
            word_counts=word_counts,
            bigram_counts=bigram_counts,
            trigram_counts=trigram_counts,
            total_words=word_counts.total_count(),
            total_bigrams=bigram_counts.total_count(),
            total_trigrams=sum(t.total_count() for t in trigram_counts.values()),
            vocabulary=word_counts.size() + 1,
        )
        logger.debug(
            "total_words=%s total_bigrams=%s total_trigrams=%s vocabulary=%s",
            state.total_words, state.total_bigrams, state.total_trigrams, state.vocabulary
        )
        return state

    def _describe_state(self, state: TrigramState) -> Dict:
        return {
            'weights': list(self.trigram_interpolation.weights),
            'vocab_size': state.word_counts.size(),
            'total_words': state.total_words,
            'total_bigrams': state.total_bigrams,
            'total_trigrams': state.total_trigrams,
            'trigram_contexts': sum(t.size() for t in state.trigram_counts.values()),
        }

    # -----------------------------------------------------------------------
    # Probabilities

    def _trigram_continuations(self, state: TrigramState,
                               prev_prev_word: str, prev_word: str) -> SparseCounter:
        inner = state.trigram_counts.get(prev_prev_word)
        if inner is None:
            return SparseCounter()
        return inner.context_counter(prev_word)

    def unigram_probability(self, word: str) -> float:
        state = self._require_state()
        count = floor_unseen(state.word_counts.get_count(word), self.unseen_word_floor)
        return self.unigram_smoother.smooth(
            count, state.total_words + self.unseen_word_floor, state.vocabulary
        )

    def bigram_probability(self, word: str, prev_word: str) -> float:
        state = self._require_state()
        continuations = state.bigram_counts.context_counter(prev_word)
        return self.bigram_smoother.smooth(
            continuations.get_count(word), continuations.total_count(), state.vocabulary
        )

    def trigram_probability(self, word: str, prev_prev_word: str, prev_word: str) -> float:
        state = self._require_state()
        continuations = self._trigram_continuations(state, prev_prev_word, prev_word)
        return self.trigram_smoother.smooth(
            continuations.get_count(word), continuations.total_count(), state.vocabulary
        )

    def probability(self, word: str, prev_prev_word: str, prev_word: str) -> float:
        """Probability of ``word`` following ``prev_prev_word prev_word``."""
        state = self._require_state()

        unigram = self.unigram_probability(word)
        if self._trigram_continuations(state, prev_prev_word, prev_word).total_count() > 0:
            return self.trigram_interpolation.combine(
                self.trigram_probability(word, prev_prev_word, prev_word),
                self.bigram_probability(word, prev_word),
                unigram,
            )
        if state.bigram_counts.context_counter(prev_word).total_count() > 0:
            return self.bigram_interpolation.combine(
                self.bigram_probability(word, prev_word),
                unigram,
            )
        return unigram

    def word_probability(self, sentence: Sequence[str], index: int) -> float:
        prev_prev_word, prev_word = self._context(sentence, index)
        return self.probability(sentence[index], prev_prev_word, prev_word)

    @staticmethod
    def _context(sentence: Sequence[str], index: int) -> Tuple[str, str]:
        padded = [START_TOKEN, START_TOKEN] + list(sentence[:index])
        return padded[-2], padded[-1]

    def check_model(self) -> float:
        """
        Spot-check one trigram context.

        Picks an observed (prev-prev, prev) context uniformly at random and
        returns the probability summed over the observed vocabulary plus the
        unseen word. Should be 1.0 up to rounding.
        """
        state = self._require_state()
        contexts: List[Tuple[str, str]] = [
            (u, v) for u, inner in state.trigram_counts.items() for v in inner.contexts()
        ]
        if contexts:
            prev_prev_word, prev_word = contexts[self.rng.randrange(len(contexts))]
        else:
            prev_prev_word, prev_word = START_TOKEN, START_TOKEN

        total = sum(
            self.probability(word, prev_prev_word, prev_word)
            for word in state.word_counts.keys()
        )
        # Any word outside the vocabulary stands in for the unseen slot.
        return total + self.probability(UNK_TOKEN, prev_prev_word, prev_word)

    # -----------------------------------------------------------------------
    # Sampling

    def generate_word(self, prev_prev_word: str = START_TOKEN, prev_word: str = START_TOKEN,
                      rng: Optional[random.Random] = None) -> str:
        """
        Sample the next word by roulette wheel over the trigram continuations
        of (prev_prev_word, prev_word), falling back to the bigram
        continuations of prev_word and then to the unigram counts.
        """
        state = self._require_state()
        rng = rng or self.rng

        candidates = [
            self._trigram_continuations(state, prev_prev_word, prev_word),
            state.bigram_counts.context_counter(prev_word),
        ]
        for continuations in candidates:
            total = continuations.total_count()
            if total > 0:
                word = roulette_select(continuations.items(), total, rng.random())
                return word if word is not None else UNK_TOKEN

        total = state.total_words - state.word_counts.get_count(START_TOKEN)
        if total <= 0:
            return STOP_TOKEN
        weighted = ((w, c) for w, c in state.word_counts.items() if w != START_TOKEN)
        word = roulette_select(weighted, total, rng.random())
        return word if word is not None else UNK_TOKEN

    def _next_word(self, history: Sequence[str], rng: random.Random) -> str:
        prev_prev_word, prev_word = self._context(history, len(history))
        return self.generate_word(prev_prev_word, prev_word, rng)
