import random

import pytest

from ngramlm.corpus import (
    START_TOKEN, STOP_TOKEN, add_sentence_markers, add_stop_marker, load_text_corpus,
    preprocess_text, split_corpus
)


def test_markers_do_not_mutate_input():
    sentence = ["a", "b"]
    assert add_stop_marker(sentence) == ["a", "b", STOP_TOKEN]
    assert add_sentence_markers(sentence) == [START_TOKEN, "a", "b", STOP_TOKEN]
    assert sentence == ["a", "b"]


def test_preprocess_text():
    assert preprocess_text("The Cat, sat.") == ["the", "cat,", "sat."]
    assert preprocess_text("The Cat, sat.", remove_punctuation=True) == ["the", "cat", "sat"]
    assert preprocess_text("Keep Case", lowercase=False) == ["Keep", "Case"]


def test_load_text_corpus(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text("The cat sat\n\nA dog barked loudly\n", encoding="utf-8")

    sentences, stats = load_text_corpus(str(path))

    assert sentences == [["the", "cat", "sat"], ["a", "dog", "barked", "loudly"]]
    assert stats['num_sentences'] == 2
    assert stats['total_tokens'] == 7


def test_load_text_corpus_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_text_corpus(str(tmp_path / "missing.txt"))


def test_split_corpus_is_seeded(corpus):
    train_a, test_a = split_corpus(corpus, 0.4, random.Random(2))
    train_b, test_b = split_corpus(corpus, 0.4, random.Random(2))

    assert (train_a, test_a) == (train_b, test_b)
    assert len(test_a) == 2
    assert len(train_a) == 3
    assert sorted(train_a + test_a) == sorted(corpus)


@pytest.mark.parametrize("fraction", [-0.1, 1.0])
def test_split_corpus_rejects_bad_fraction(corpus, fraction):
    with pytest.raises(ValueError):
        split_corpus(corpus, fraction)
