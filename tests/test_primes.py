import random

import pytest

from mirsa.errors import PrimesFileError
from mirsa.primes import pick_prime, read_primes_file


def write(tmp_path, text):
    path = tmp_path / "Primes.txt"
    path.write_text(text)
    return path


def test_reads_count_then_whitespace_separated(tmp_path):
    path = write(tmp_path, "5\n2 3\t5\n7\n\n11\n")
    assert read_primes_file(path) == [2, 3, 5, 7, 11]


def test_extra_values_beyond_count_ignored(tmp_path):
    path = write(tmp_path, "2\n61 53 47\n")
    assert read_primes_file(path) == [61, 53]


def test_missing_file(tmp_path):
    with pytest.raises(PrimesFileError):
        read_primes_file(tmp_path / "nope.txt")


@pytest.mark.parametrize("text", ["x\n2 3\n", "\n", "0\n", "-3\n2 3 5\n"])
def test_invalid_count(tmp_path, text):
    with pytest.raises(PrimesFileError):
        read_primes_file(write(tmp_path, text))


def test_too_few_primes(tmp_path):
    with pytest.raises(PrimesFileError):
        read_primes_file(write(tmp_path, "4\n2 3 5\n"))


def test_bad_prime_token(tmp_path):
    with pytest.raises(PrimesFileError):
        read_primes_file(write(tmp_path, "2\n61 5x3\n"))


def test_pick_prime_is_seeded():
    primes = [2, 3, 5, 7, 11, 13]
    a = [pick_prime(primes, random.Random(42)) for _ in range(3)]
    b = [pick_prime(primes, random.Random(42)) for _ in range(3)]
    assert a == b
    assert all(p in primes for p in a)


def test_pick_prime_empty():
    with pytest.raises(PrimesFileError):
        pick_prime([], random.Random(0))
