"""
Model Registry

Maps model names to classes so callers (the CLI in particular) can build a
model from a string.
"""

from enum import Enum
from typing import Dict, Type, Union

from .bigram import AddDeltaBigramModel, InterpolatedBigramModel
from .model import LanguageModel
from .trigram import BackoffTrigramModel
from .unigram import AddDeltaUnigramModel


class ModelType(Enum):
    """Available language models."""
    UNIGRAM = "unigram"                            # Add-δ unigram
    BIGRAM = "bigram"                              # Add-δ bigram, 50/50 blend
    INTERPOLATED_BIGRAM = "interpolated_bigram"    # Add-δ bigram, 70/30 blend
    TRIGRAM = "trigram"                            # Back-off trigram


MODEL_CLASSES: Dict[ModelType, Type[LanguageModel]] = {
    ModelType.UNIGRAM: AddDeltaUnigramModel,
    ModelType.BIGRAM: AddDeltaBigramModel,
    ModelType.INTERPOLATED_BIGRAM: InterpolatedBigramModel,
    ModelType.TRIGRAM: BackoffTrigramModel,
}


def get_model(model_type: Union[ModelType, str], **kwargs) -> LanguageModel:
    """
    Factory function to create an untrained language model.

    Args:
        model_type: A ModelType or its string value (e.g. "trigram")
        **kwargs: Smoothing parameters and ``rng``/``seed``, forwarded to
            the model's constructor

    Returns:
        A new, untrained model
    """
    if isinstance(model_type, str):
        try:
            model_type = ModelType(model_type.lower())
        except ValueError:
            raise ValueError(f"Unknown model type: {model_type}") from None

    try:
        model_class = MODEL_CLASSES[model_type]
    except KeyError:
        raise ValueError(f"Unknown model type: {model_type}") from None

    return model_class(**kwargs)
