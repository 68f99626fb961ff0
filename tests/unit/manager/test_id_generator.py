import pytest

from shortlinks.manager.id_generator import ALPHABET, generate_random_id, generate_unique_ids


def test_alphabet_is_base62():
    assert len(ALPHABET) == 62
    assert len(set(ALPHABET)) == 62
    assert ALPHABET.isalnum()


@pytest.mark.parametrize('length', [1, 4, 7, 16])
def test_generate_random_id_length(length):
    short_id = generate_random_id(length)

    assert len(short_id) == length
    assert set(short_id) <= set(ALPHABET)


def test_generate_random_id_default_length():
    assert len(generate_random_id()) == 4


@pytest.mark.parametrize('length', [0, -3])
def test_generate_random_id_with_invalid_length(length):
    with pytest.raises(ValueError):
        generate_random_id(length)


def test_generate_unique_ids_are_distinct():
    ids = generate_unique_ids(50, 4)

    assert len(ids) == 50
    assert len(set(ids)) == 50
    assert all(len(short_id) == 4 for short_id in ids)


def test_generate_unique_ids_is_bounded_by_namespace_size():
    """Only 62 one-character IDs exist; asking for more must still terminate."""
    ids = generate_unique_ids(100, 1)

    assert len(ids) <= 62
    assert len(set(ids)) == len(ids)


def test_generate_unique_ids_with_zero_count():
    assert generate_unique_ids(0, 4) == []
