import math

import pytest

from ngramlm import get_model
from ngramlm.model import roulette_select
from ngramlm.registry import ModelType

ALL_MODELS = [t.value for t in ModelType]


@pytest.mark.parametrize("model_type", ALL_MODELS)
def test_log_probability_matches_product(model_type, corpus):
    model = get_model(model_type)
    model.train(corpus)
    sentence = ["the", "cat", "sat"]

    assert model.sentence_log_probability(sentence) == pytest.approx(
        math.log(model.sentence_probability(sentence))
    )


@pytest.mark.parametrize("model_type", ALL_MODELS)
def test_log_probability_survives_long_sentences(model_type, corpus):
    model = get_model(model_type)
    model.train(corpus)
    sentence = ["unseen"] * 2000

    assert model.sentence_probability(sentence) == 0.0
    assert math.isfinite(model.sentence_log_probability(sentence))


@pytest.mark.parametrize("model_type", ALL_MODELS)
def test_perplexity(model_type, corpus):
    model = get_model(model_type)
    model.train(corpus)

    n_words = sum(len(s) + 1 for s in corpus)
    log2_total = sum(model.sentence_log_probability(s) for s in corpus) / math.log(2)
    assert model.perplexity(corpus) == pytest.approx(2 ** (-log2_total / n_words))
    assert model.perplexity(corpus) > 1


def test_perplexity_of_nothing_is_infinite(corpus):
    model = get_model("unigram")
    model.train(corpus)
    assert model.perplexity([]) == float('inf')


def test_higher_order_fits_training_data_better(corpus):
    unigram = get_model("unigram")
    unigram.train(corpus)
    trigram = get_model("trigram")
    trigram.train(corpus)

    assert trigram.perplexity(corpus) < unigram.perplexity(corpus)


@pytest.mark.parametrize("model_type", ALL_MODELS)
def test_training_stats_and_progress(model_type, corpus):
    calls = []
    model = get_model(model_type)
    stats = model.train(iter(corpus), progress_callback=lambda cur, tot: calls.append((cur, tot)))

    assert stats is model.training_stats
    assert stats['num_sentences'] == len(corpus)
    assert stats['model'] == model.name
    assert calls[-1] == (len(corpus), len(corpus))
    assert model.is_trained
    assert "trained" in repr(model)


@pytest.mark.parametrize("model_type", ALL_MODELS)
def test_generate_sentence_respects_max_length(model_type):
    model = get_model(model_type, seed=1)
    model.train([["a"] * 50])
    assert len(model.generate_sentence(max_length=3)) <= 3


def test_roulette_select():
    weighted = [("a", 1.0), ("b", 3.0)]
    assert roulette_select(weighted, 4.0, 0.0) == "a"
    assert roulette_select(weighted, 4.0, 0.3) == "b"
    assert roulette_select(weighted, 8.0, 0.9) is None
    assert roulette_select(weighted, 0.0, 0.1) is None
