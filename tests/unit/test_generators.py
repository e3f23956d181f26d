"""Tests for document auto id generation."""

from firelite.core.constants import AUTO_ID_ALPHABET
from firelite.shared.utils.generators import generate_auto_id


def test_auto_id_shape() -> None:
    auto_id = generate_auto_id()
    assert len(auto_id) == 20
    assert set(auto_id) <= set(AUTO_ID_ALPHABET)


def test_auto_ids_differ() -> None:
    assert len({generate_auto_id() for _ in range(100)}) == 100
