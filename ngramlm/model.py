"""
Language Model Base Class

This module contains the LanguageModel base class shared by the unigram,
bigram and trigram estimators: the train/query lifecycle, sentence-level
probabilities, perplexity and sentence generation.
"""

import logging
import math
import random
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .corpus import STOP_TOKEN, add_stop_marker


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class ModelNotTrainedError(RuntimeError):
    """Raised when a model is queried before ``train`` has been called."""


def roulette_select(weighted: Iterable[Tuple[str, float]], total: float,
                    sample: float) -> Optional[str]:
    """
    Roulette-wheel selection.

    Walks ``weighted`` accumulating ``weight / total`` and returns the first
    word at which the running sum exceeds ``sample``. Returns None if the
    walk runs out first (floating-point slack, or mass reserved elsewhere).
    """
    if total <= 0:
        return None
    cumulative = 0.0
    for word, weight in weighted:
        cumulative += weight / total
        if cumulative > sample:
            return word
    return None


def _iter_with_progress(sentences: List[Sequence[str]],
                        progress_callback: Optional[ProgressCallback]) -> Iterator[Sequence[str]]:
    total = len(sentences)
    for idx, sent in enumerate(sentences):
        yield sent
        if progress_callback and (idx + 1) % 100 == 0:
            progress_callback(idx + 1, total)
    if progress_callback:
        progress_callback(total, total)


class LanguageModel(ABC):
    """
    Base class for the smoothed n-gram language models.

    A model starts untrained. ``train`` derives every count and scalar from
    scratch into a fresh state object and swaps it in with a single
    assignment; until the next ``train`` the model is query-only. Querying
    an untrained model raises ModelNotTrainedError.

    Attributes:
        rng: Random source used for sampling and diagnostics
        training_stats: Summary of the last training pass
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        """
        Args:
            rng: Random source for sampling and ``check_model``
            seed: Seed for a new random source, used when ``rng`` is None
        """
        self.rng = rng if rng is not None else random.Random(seed)
        self._state: Any = None
        self.training_stats: Dict = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the display name of the model."""
        pass

    @property
    def is_trained(self) -> bool:
        return self._state is not None

    # -----------------------------------------------------------------------
    # Training

    def train(self, sentences: Iterable[Sequence[str]],
              progress_callback: Optional[ProgressCallback] = None) -> Dict:
        """
        Train the model on tokenized sentences, replacing any previous state.

        Args:
            sentences: Tokenized sentences without start/stop markers
            progress_callback: Optional callback(current, total) for progress

        Returns:
            Dictionary of training statistics
        """
        sentences = list(sentences)
        state = self._build_state(_iter_with_progress(sentences, progress_callback))
        self._state = state

        self.training_stats = {
            'model': self.name,
            'num_sentences': len(sentences),
            **self._describe_state(state)
        }
        logger.info("Trained %s on %d sentences", self.name, len(sentences))
        return self.training_stats

    @abstractmethod
    def _build_state(self, sentences: Iterable[Sequence[str]]) -> Any:
        """Count the sentences into a new, complete state object."""
        pass

    @abstractmethod
    def _describe_state(self, state: Any) -> Dict:
        """Summarize a state for ``training_stats``."""
        pass

    def _require_state(self) -> Any:
        if self._state is None:
            raise ModelNotTrainedError(
                f"{self.name} must be trained before computing probabilities"
            )
        return self._state

    # -----------------------------------------------------------------------
    # Probabilities

    @abstractmethod
    def word_probability(self, sentence: Sequence[str], index: int) -> float:
        """
        Probability of ``sentence[index]`` given its left context.

        Smoothing guarantees a positive value for every word, including
        words never seen in training.
        """
        pass

    def sentence_probability(self, sentence: Sequence[str]) -> float:
        """
        Probability of a whole sentence: the product of the word
        probabilities, including a final stop token. Long sentences may
        underflow to 0; use ``sentence_log_probability`` for those.
        """
        self._require_state()
        stopped = add_stop_marker(sentence)
        probability = 1.0
        for index in range(len(stopped)):
            probability *= self.word_probability(stopped, index)
        return probability

    def sentence_log_probability(self, sentence: Sequence[str]) -> float:
        """Natural-log probability of a sentence (including the stop token)."""
        self._require_state()
        stopped = add_stop_marker(sentence)
        total = 0.0
        for index in range(len(stopped)):
            prob = self.word_probability(stopped, index)
            if prob <= 0:
                return float('-inf')
            total += math.log(prob)
        return total

    def perplexity(self, sentences: Iterable[Sequence[str]]) -> float:
        """
        Calculate perplexity on a set of sentences.

        Perplexity = 2^(-1/N * sum(log2(P(w_i|context))))

        Every sentence contributes its words plus one stop token to N.

        Returns:
            Perplexity score (lower is better)
        """
        self._require_state()
        total_log_prob = 0.0
        total_words = 0

        for sent in sentences:
            stopped = add_stop_marker(sent)
            for index in range(len(stopped)):
                prob = self.word_probability(stopped, index)
                if prob <= 0:
                    return float('inf')
                total_log_prob += math.log2(prob)
                total_words += 1

        if total_words == 0:
            logger.warning("Perplexity requested for an empty set of sentences")
            return float('inf')

        return 2 ** (-total_log_prob / total_words)

    @abstractmethod
    def check_model(self) -> float:
        """Diagnostic probability-mass check; semantics differ per model."""
        pass

    # -----------------------------------------------------------------------
    # Sampling

    @abstractmethod
    def _next_word(self, history: Sequence[str], rng: random.Random) -> str:
        """Sample the word following ``history`` (the words generated so far)."""
        pass

    def generate_sentence(self, rng: Optional[random.Random] = None,
                          max_length: Optional[int] = None) -> List[str]:
        """
        Generate a random sentence.

        Words are sampled until the stop token comes up; the stop token
        itself is not returned.

        Args:
            rng: Random source (defaults to the model's own)
            max_length: Optional cap on the number of generated words

        Returns:
            List of generated tokens
        """
        self._require_state()
        rng = rng or self.rng

        sentence: List[str] = []
        word = self._next_word(sentence, rng)
        while word != STOP_TOKEN:
            sentence.append(word)
            if max_length is not None and len(sentence) >= max_length:
                break
            word = self._next_word(sentence, rng)
        return sentence

    def __repr__(self) -> str:
        status = "trained" if self.is_trained else "untrained"
        return f"{self.__class__.__name__}({status})"
