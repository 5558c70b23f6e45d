import pytest

from modpackkit.murmur2 import Murmur2CF, fingerprint, murmur_hash2, normalize


def test_empty_input_seed_zero():
    assert murmur_hash2(b"", 0) == 0


def test_normalize_strips_only_cf_whitespace():
    assert normalize(b"a b\tc\nd\re") == b"abcde"
    assert normalize(b"\x0b\x0c") == b"\x0b\x0c"


@pytest.mark.parametrize("size", range(0, 12))
def test_hash_is_32_bit_and_deterministic(size):
    data = bytes(range(1, size + 1))
    first = murmur_hash2(data, 1)
    assert 0 <= first < 2**32
    assert murmur_hash2(data, 1) == first


def test_tail_lengths_give_distinct_hashes():
    hashes = {murmur_hash2(b"abcdefgh"[:n], 1) for n in range(1, 9)}
    assert len(hashes) == 8


def test_fingerprint_ignores_whitespace():
    assert fingerprint(b"hello world\r\n") == fingerprint(b"helloworld")
    assert fingerprint(b"hello world") == murmur_hash2(b"helloworld", 1)


def test_hasher_matches_fingerprint():
    data = b"some jar\ncontents \t here"
    hasher = Murmur2CF()
    hasher.update(data)
    assert hasher.intdigest() == fingerprint(data)
    assert hasher.digest() == fingerprint(data).to_bytes(4, "big")
    assert hasher.hexdigest() == hasher.digest().hex()


def test_incremental_updates_match_single_update():
    data = b"The quick brown fox\njumps over the lazy dog"
    chunked = Murmur2CF()
    for start in range(0, len(data), 5):
        chunked.update(data[start:start + 5])
    assert chunked.digest() == Murmur2CF(data).digest()


def test_reset_clears_buffer():
    hasher = Murmur2CF(b"something")
    hasher.reset()
    assert hasher.digest() == Murmur2CF().digest()
    assert hasher.intdigest() == fingerprint(b"")


def test_digest_size():
    hasher = Murmur2CF(b"abc")
    assert len(hasher.digest()) == hasher.digest_size == 4