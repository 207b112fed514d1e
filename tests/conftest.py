import random

import pytest


class SequenceRandom(random.Random):
    """Random source that replays fixed samples."""

    def __init__(self, values, index=0):
        super().__init__(0)
        self._values = list(values)
        self._pos = 0
        self._index = index

    def random(self):
        value = self._values[self._pos]
        self._pos += 1
        return value

    def randrange(self, *args, **kwargs):
        return self._index


@pytest.fixture
def corpus():
    return [
        ["the", "cat", "sat", "on", "the", "mat"],
        ["the", "dog", "sat"],
        ["a", "cat", "ate", "the", "fish"],
        ["the", "dog", "ate"],
        ["a", "bird", "sang"],
    ]
