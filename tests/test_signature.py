import hashlib

import pytest

from ledgersig.crypto import (
    PrivateKey, RecoverableSignature, recover_public_key, sign_hash_recoverable,
    signing_digest,
)
from ledgersig.exceptions import SignatureRecoveryError

KEY = PrivateKey("11" * 32)


def test_signing_digest_fits_curve_size():
    long_hash = bytes(range(64))
    assert signing_digest(long_hash) == long_hash[:32]
    assert signing_digest(b"\x01\x02") == b"\x00" * 30 + b"\x01\x02"
    assert signing_digest(b"\x07" * 32) == b"\x07" * 32


@pytest.mark.parametrize("hash_bytes", [
    hashlib.sha512(b"hello").digest(),
    hashlib.sha256(b"hello").digest(),
    b"\x01",
    b"\xff" * 100,
])
def test_recover_returns_signing_key(hash_bytes):
    for key in (KEY, PrivateKey("22" * 32), PrivateKey.create()):
        signature = sign_hash_recoverable(hash_bytes, key)
        assert recover_public_key(hash_bytes, signature.to_bytes()) == key.public_key()


def test_signature_layout():
    signature = sign_hash_recoverable(b"\xaa" * 32, KEY)
    data = signature.to_bytes()
    assert len(data) == 65
    assert 27 <= data[0] <= 30
    assert RecoverableSignature.from_bytes(data) == signature


def test_signing_is_deterministic():
    first = sign_hash_recoverable(b"\xaa" * 32, KEY)
    assert sign_hash_recoverable(b"\xaa" * 32, KEY) == first


def test_wrong_hash_recovers_other_key():
    signature = sign_hash_recoverable(b"\xaa" * 32, KEY).to_bytes()
    try:
        recovered = recover_public_key(b"\xbb" * 32, signature)
    except SignatureRecoveryError:
        return
    assert recovered != KEY.public_key()


@pytest.mark.parametrize("mutate", [
    lambda sig: sig[:64],
    lambda sig: sig + b"\x00",
    lambda sig: bytes([26]) + sig[1:],
    lambda sig: bytes([31]) + sig[1:],
    lambda sig: sig[:1] + b"\x00" * 32 + sig[33:],
    lambda sig: sig[:33] + b"\x00" * 32,
    lambda sig: sig[:1] + b"\xff" * 32 + sig[33:],
    lambda sig: sig[:33] + b"\xff" * 32,
])
def test_malformed_signatures_fail_recovery(mutate):
    signature = sign_hash_recoverable(b"\xaa" * 32, KEY).to_bytes()
    with pytest.raises(SignatureRecoveryError):
        recover_public_key(b"\xaa" * 32, mutate(signature))
