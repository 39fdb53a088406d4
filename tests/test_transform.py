import random

import pytest

from rsa_core.config import RsaConfig
from rsa_core.encoding import int_to_message, message_to_int, modulus_bytes
from rsa_core.errors import ValueOutOfRange
from rsa_core.transform import (
    decrypt,
    decrypt_int,
    encrypt,
    encrypt_int,
    rsa_roundtrip,
    sign,
    sign_int,
    signature_matches,
    verify,
    verify_int,
)


def test_toy_textbook_example(toy_keypair):
    assert encrypt(65, toy_keypair.public) == 2790
    assert decrypt(2790, toy_keypair.private) == 65


def test_toy_full_domain_roundtrip(toy_keypair):
    pub, priv = toy_keypair.public, toy_keypair.private
    for m in range(pub.n):
        assert decrypt(encrypt(m, pub), priv) == m
        assert verify(sign(m, priv), pub) == m


@pytest.mark.parametrize("fixture_name", ["keypair_512", "keypair_1024"])
def test_roundtrip_random_messages(request, fixture_name):
    keypair = request.getfixturevalue(fixture_name)
    rng = random.Random(fixture_name)
    for _ in range(10):
        m = rng.randrange(0, keypair.n)
        assert decrypt(encrypt(m, keypair.public), keypair.private) == m
        assert verify(sign(m, keypair.private), keypair.public) == m


def test_boundary_values_roundtrip(keypair_512):
    pub, priv = keypair_512.public, keypair_512.private
    for m in (0, 1, pub.n - 1):
        assert decrypt(encrypt(m, pub), priv) == m
        assert verify(sign(m, priv), pub) == m


@pytest.mark.parametrize("operation", ["encrypt", "decrypt", "sign", "verify"])
@pytest.mark.parametrize("offset", ["n", "n+1", "negative"])
def test_out_of_range_values_are_rejected(toy_keypair, operation, offset):
    n = toy_keypair.n
    value = {"n": n, "n+1": n + 1, "negative": -1}[offset]
    call = {
        "encrypt": lambda v: encrypt(v, toy_keypair.public),
        "decrypt": lambda v: decrypt(v, toy_keypair.private),
        "sign": lambda v: sign(v, toy_keypair.private),
        "verify": lambda v: verify(v, toy_keypair.public),
    }[operation]
    with pytest.raises(ValueOutOfRange) as excinfo:
        call(value)
    assert excinfo.value.value == value
    assert excinfo.value.modulus == n


def test_non_integers_are_rejected(toy_keypair):
    with pytest.raises(TypeError):
        encrypt(True, toy_keypair.public)
    with pytest.raises(TypeError):
        sign(65.0, toy_keypair.private)  # type: ignore[arg-type]


def test_raw_variants_match_key_variants(keypair_512):
    pub, priv = keypair_512.public, keypair_512.private
    m = 0xC0FFEE
    assert encrypt_int(m, pub.e, pub.n) == encrypt(m, pub)
    assert decrypt_int(encrypt(m, pub), priv.d, priv.n) == decrypt(encrypt(m, pub), priv)
    assert sign_int(m, priv.d, priv.n) == sign(m, priv)
    assert verify_int(sign(m, priv), pub.e, pub.n) == verify(sign(m, priv), pub)


def test_raw_variants_check_range():
    with pytest.raises(ValueOutOfRange):
        encrypt_int(3233, 17, 3233)
    with pytest.raises(ValueOutOfRange):
        verify_int(-5, 17, 3233)


def test_signature_matches(keypair_512):
    m = 123456789
    s = sign(m, keypair_512.private)
    assert signature_matches(m, s, keypair_512.public)
    assert not signature_matches(m + 1, s, keypair_512.public)


def test_rsa_roundtrip_helper():
    n, e, d, ok = rsa_roundtrip(256, config=RsaConfig.seeded(21))
    assert ok and all(isinstance(value, int) for value in (n, e, d))
    assert n.bit_length() == 256


def test_message_conversion_is_bound_to_modulus(toy_keypair):
    n = toy_keypair.n
    assert modulus_bytes(n) == 2
    assert message_to_int(b"\x01\x00", n) == 256
    assert int_to_message(256, n) == b"\x01\x00"
    assert int_to_message(0, n) == b""
    assert int_to_message(12, n, 2) == b"\x00\x0c"
    with pytest.raises(ValueOutOfRange):
        int_to_message(n, n)
    with pytest.raises(ValueOutOfRange):
        int_to_message(-1, n)
    with pytest.raises(ValueError):
        int_to_message(1, n, 3)
    with pytest.raises(ValueError):
        int_to_message(1 << 8, n, 1)


def test_message_roundtrip_through_decryption(keypair_512):
    msg = b"\x00\x00leading zeros"
    m = message_to_int(msg, keypair_512.n)
    out = int_to_message(decrypt(encrypt(m, keypair_512.public), keypair_512.private), keypair_512.n, len(msg))
    assert out == msg


def test_message_to_int_rejects_long_messages(toy_keypair):
    assert message_to_int(b"\x0c", toy_keypair.n) == 12
    with pytest.raises(ValueOutOfRange):
        message_to_int(b"too long for a toy modulus", toy_keypair.n)
