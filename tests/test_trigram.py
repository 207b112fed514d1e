import pytest

from conftest import SequenceRandom
from ngramlm import START_TOKEN, STOP_TOKEN, UNK_TOKEN, BackoffTrigramModel, ModelNotTrainedError


def trained(sentences, **kwargs):
    model = BackoffTrigramModel(**kwargs)
    model.train(sentences)
    return model


def test_training_counts():
    model = trained([["a", "b"]])
    state = model._state

    # <S> a b </S>
    assert state.total_words == 4
    assert state.vocabulary == 5
    assert state.total_bigrams == 3
    assert state.total_trigrams == 2
    assert state.bigram_counts.get_count("b", STOP_TOKEN) == 1
    assert state.trigram_counts[START_TOKEN].get_count("a", "b") == 1
    assert state.trigram_counts["a"].get_count("b", STOP_TOKEN) == 1
    assert "b" not in state.trigram_counts


def test_single_word_sentence():
    model = trained([["a"]])
    state = model._state

    assert state.total_words == 3
    assert state.total_bigrams == 2
    assert state.total_trigrams == 1


def test_first_word_backs_off_to_bigram():
    model = trained([["a", "b"]])
    p2 = (1 + 0.001) / (1 + 5 * 0.001)
    p1 = (1 + 0.01) / (4 + 1 + 5 * 0.01)

    assert model.word_probability(["a", "b"], 0) == pytest.approx(0.7 * p2 + 0.3 * p1)


def test_seen_trigram_context_interpolates_three_levels():
    model = trained([["a", "b"]])
    p3 = (1 + 0.001) / (1 + 5 * 0.001)
    p2 = (1 + 0.001) / (1 + 5 * 0.001)
    p1 = (1 + 0.01) / (4 + 1 + 5 * 0.01)

    assert model.probability("b", START_TOKEN, "a") == pytest.approx(0.6 * p3 + 0.3 * p2 + 0.1 * p1)
    assert model.word_probability(["a", "b"], 1) == model.probability("b", START_TOKEN, "a")


def test_unseen_context_uses_unigram():
    model = trained([["a", "b"]])
    assert model.probability("zebra", "q", "r") == pytest.approx(1.01 / 5.05)
    assert model.probability("zebra", "q", "r") == model.unigram_probability("zebra")


def test_every_context_is_normalized(corpus):
    model = trained(corpus)
    vocab = model._state.word_counts.keys()
    contexts = [(u, v) for u in vocab + ["q"] for v in vocab + ["r"]]

    for prev_prev_word, prev_word in contexts:
        total = sum(model.probability(w, prev_prev_word, prev_word) for w in vocab)
        total += model.probability(UNK_TOKEN, prev_prev_word, prev_word)
        assert total == pytest.approx(1.0, abs=1e-9)


def test_probability_bounds(corpus):
    model = trained(corpus)
    vocab = model._state.word_counts.keys() + ["never-seen"]
    for u in vocab:
        for v in vocab:
            for w in vocab:
                assert 0 < model.probability(w, u, v) <= 1


def test_check_model(corpus):
    model = trained(corpus, seed=5)
    assert model.check_model() == pytest.approx(1.0, abs=1e-9)


def test_extra_occurrence_shifts_mass():
    before = trained([["a", "b"], ["a", "c"]])
    after = trained([["a", "b"], ["a", "c"], ["a", "b"]])

    assert after.probability("b", START_TOKEN, "a") > before.probability("b", START_TOKEN, "a")
    assert after.probability("c", START_TOKEN, "a") < before.probability("c", START_TOKEN, "a")


def test_sentence_probability_is_product(corpus):
    model = trained(corpus)
    sentence = ["the", "dog", "ate", "the", "mat"]

    expected = 1.0
    for index, word in enumerate(sentence + [STOP_TOKEN]):
        padded = [START_TOKEN, START_TOKEN] + sentence
        expected *= model.probability(word, padded[index], padded[index + 1])

    assert model.sentence_probability(sentence) == pytest.approx(expected)


def test_retraining_is_idempotent(corpus):
    model = trained(corpus)
    first = model.sentence_probability(["a", "cat", "sat"])
    model.train(corpus)
    assert model.sentence_probability(["a", "cat", "sat"]) == first


def test_custom_weights_are_validated():
    with pytest.raises(ValueError):
        BackoffTrigramModel(trigram_weights=(0.5, 0.5))
    with pytest.raises(ValueError):
        BackoffTrigramModel(bigram_weights=(0.5, 0.6))
    with pytest.raises(ValueError):
        BackoffTrigramModel(trigram_delta=0)


def test_empty_corpus():
    model = trained([])
    assert model.probability("x", START_TOKEN, START_TOKEN) == pytest.approx(1.0)
    assert model.check_model() == pytest.approx(1.0)
    assert model.generate_sentence() == []


def test_generation():
    model = trained([["x", "y"]])
    assert model.generate_sentence() == ["x", "y"]
    assert model.generate_word(START_TOKEN, "x") == "y"
    # unseen trigram context, seen bigram row
    assert model.generate_word("q", "x") == "y"
    # nothing seen: unigram walk over x, y, </S>
    assert model.generate_word("q", "r", SequenceRandom([0.5])) == "y"


def test_untrained_model_fails_fast():
    model = BackoffTrigramModel()
    with pytest.raises(ModelNotTrainedError):
        model.probability("a", START_TOKEN, START_TOKEN)
    with pytest.raises(ModelNotTrainedError):
        model.generate_word()
