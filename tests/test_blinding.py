import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from blindsig.blinding import (
    BlindedMessage,
    blind,
    blind_int,
    blind_signature_roundtrip,
    draw_blinding_factor,
    unblind,
)
from rsa_core.arithmetic import gcd
from rsa_core.config import RsaConfig
from rsa_core.errors import KeyGenerationExhausted, NotInvertible, ValueOutOfRange
from rsa_core.random_source import deterministic_source
from rsa_core.transform import sign, verify


@pytest.mark.parametrize("fixture_name", ["keypair_512", "keypair_1024"])
def test_unblinded_signature_equals_direct_signature(request, fixture_name):
    keypair = request.getfixturevalue(fixture_name)
    pub, priv = keypair.public, keypair.private
    rng = random.Random(fixture_name)
    for _ in range(5):
        m = rng.randrange(0, pub.n)
        masked = blind(m, pub, config=RsaConfig.seeded(rng.getrandbits(32)))
        blind_sig = sign(masked.blinded_message, priv)
        signature = unblind(blind_sig, masked.r, pub.n)
        assert signature == sign(m, priv)
        assert verify(signature, pub) == m


def test_toy_blinding_all_messages(toy_keypair):
    pub, priv = toy_keypair.public, toy_keypair.private
    config = RsaConfig.seeded(8)
    for m in range(0, pub.n, 7):
        blinded = blind(m, pub, config=config)
        assert unblind(sign(blinded.blinded_message, priv), blinded.r, pub.n) == sign(m, priv)


def test_blinded_message_differs_from_message(keypair_512):
    m = 42
    blinded = blind(m, keypair_512.public, config=RsaConfig.seeded(1))
    assert isinstance(blinded, BlindedMessage)
    assert blinded.blinded_message != m
    assert 0 <= blinded.blinded_message < keypair_512.n


def test_fresh_factor_per_call(keypair_512):
    config = RsaConfig()
    first = blind(7, keypair_512.public, config=config)
    second = blind(7, keypair_512.public, config=config)
    assert first.r != second.r
    assert first.blinded_message != second.blinded_message


def test_blind_int_matches_blind(keypair_512):
    pub = keypair_512.public
    a = blind(99, pub, config=RsaConfig.seeded(5))
    b = blind_int(99, pub.e, pub.n, config=RsaConfig.seeded(5))
    assert a == b


def test_concurrent_blinding_matches_sequential(keypair_512):
    pub = keypair_512.public
    seeds = list(range(20, 36))
    with ThreadPoolExecutor(max_workers=4) as pool:
        threaded = list(pool.map(lambda s: blind(1000 + s, pub, config=RsaConfig.seeded(s)), seeds))
    sequential = [blind(1000 + s, pub, config=RsaConfig.seeded(s)) for s in seeds]
    assert threaded == sequential


def test_blinding_factor_range_and_coprimality(keypair_512):
    rng = deterministic_source(3)
    n = keypair_512.n
    for _ in range(50):
        r = draw_blinding_factor(n, rng=rng)
        assert 2 <= r < n
        assert gcd(r, n) == 1


def test_blinding_factor_scales_with_modulus(keypair_1024):
    rng = deterministic_source(4)
    sizes = [draw_blinding_factor(keypair_1024.n, rng=rng).bit_length() for _ in range(20)]
    assert max(sizes) > 1000


class _StuckSource:
    """Always proposes 61, a factor of 3233."""

    def getrandbits(self, k):
        return 61

    def randrange(self, start, stop):
        return 61


def test_blinding_factor_exhaustion(toy_keypair):
    with pytest.raises(KeyGenerationExhausted) as excinfo:
        draw_blinding_factor(toy_keypair.n, rng=_StuckSource(), max_attempts=5)
    assert excinfo.value.attempts == 5


def test_blinding_factor_rejects_tiny_modulus():
    with pytest.raises(ValueError):
        draw_blinding_factor(2)


def test_blind_rejects_out_of_range_message(toy_keypair):
    with pytest.raises(ValueOutOfRange):
        blind(toy_keypair.n, toy_keypair.public)
    with pytest.raises(ValueOutOfRange):
        blind(-1, toy_keypair.public)


def test_unblind_boundaries(toy_keypair):
    n = toy_keypair.n
    assert unblind(0, 2, n) == 0
    assert unblind(n - 1, 1, n) == n - 1
    with pytest.raises(ValueOutOfRange):
        unblind(n, 2, n)
    with pytest.raises(ValueOutOfRange):
        unblind(-1, 2, n)
    with pytest.raises(ValueOutOfRange):
        unblind(5, n, n)


def test_unblind_non_coprime_factor(toy_keypair):
    # 61 divides 3233
    with pytest.raises(NotInvertible):
        unblind(100, 61, toy_keypair.n)


def test_roundtrip_helper():
    result = blind_signature_roundtrip(256, config=RsaConfig.seeded(99))
    assert result["verifies"]
    assert result["matches_direct"]
    assert result["hides_message"]
