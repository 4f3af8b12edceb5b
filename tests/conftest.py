import asyncio

import pytest
from cachetools import LRUCache

from medsafety.augmenter import LabelAugmenter
from medsafety.models import Allergy, Medication


class FakeLabelClient:
    """Stands in for OpenFDAClient; labels are keyed by generic query name."""

    def __init__(self, labels=None, error=None):
        self.labels = labels or {}
        self.error = error
        self.calls = []

    def fetch_label(self, generic_name):
        self.calls.append(generic_name)
        if self.error is not None:
            raise self.error
        return self.labels.get(generic_name)


def label_mentioning(text):
    return {"drug_interactions": [text]}


def run(coro):
    return asyncio.run(coro)


def meds(*names):
    return [Medication(id=str(i), name=name) for i, name in enumerate(names, start=1)]


def allergies(*names):
    return [Allergy(id=str(i), name=name) for i, name in enumerate(names, start=1)]


@pytest.fixture
def fake_client():
    return FakeLabelClient()


@pytest.fixture
def augmenter(fake_client):
    return LabelAugmenter(client=fake_client, cache=LRUCache(maxsize=64))
