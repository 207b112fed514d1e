import random

import pytest

from ngramlm import (
    AddDeltaBigramModel, AddDeltaUnigramModel, BackoffTrigramModel, InterpolatedBigramModel,
    ModelType, get_model
)


@pytest.mark.parametrize("name, model_class", [
    ("unigram", AddDeltaUnigramModel),
    ("bigram", AddDeltaBigramModel),
    ("interpolated_bigram", InterpolatedBigramModel),
    ("trigram", BackoffTrigramModel),
    ("TRIGRAM", BackoffTrigramModel),
])
def test_get_model_by_name(name, model_class):
    model = get_model(name)
    assert isinstance(model, model_class)
    assert not model.is_trained


def test_get_model_by_enum():
    assert isinstance(get_model(ModelType.INTERPOLATED_BIGRAM), InterpolatedBigramModel)


def test_parameters_are_forwarded():
    rng = random.Random(0)
    model = get_model("unigram", delta=0.5, rng=rng)
    assert model.smoother.delta == 0.5
    assert model.rng is rng

    model = get_model("interpolated_bigram", weights=(0.9, 0.1))
    assert model.interpolation.weights == (0.9, 0.1)


def test_unknown_model_type():
    with pytest.raises(ValueError, match="Unknown model type"):
        get_model("fourgram")


def test_unknown_parameter():
    with pytest.raises(TypeError):
        get_model("unigram", lambdas=(0.5, 0.5))
