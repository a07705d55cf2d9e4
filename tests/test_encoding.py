import base64

import pytest

from ledgersig.exceptions import InvalidSignatureEncodingError, ValidationError
from ledgersig.utils.encoding import (
    hex_to_bytes, bytes_to_hex, encode_base58, decode_base58,
    encode_base58_check, decode_base58_check, encode_account_id,
    decode_account_id, encode_signature, decode_signature, sha512_half,
)

GENESIS_ADDRESS = "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh"
ACCOUNT_ZERO = "rrrrrrrrrrrrrrrrrrrrrhoLvTp"


def test_hex_bytes():
    data = b"\x00\x01deadbeef"
    assert hex_to_bytes(bytes_to_hex(data)) == data
    assert bytes_to_hex(b"\xab", upper=True) == "AB"
    with pytest.raises(ValidationError):
        hex_to_bytes("zzzz")


def test_base58_leading_zeros_use_first_alphabet_char():
    encoded = encode_base58(b"\x00\x00\x01")
    assert encoded.startswith("rr")
    assert decode_base58(encoded) == b"\x00\x00\x01"
    with pytest.raises(ValidationError):
        decode_base58("0OIl")


def test_base58check_detects_corruption():
    enc = encode_base58_check(b"test payload")
    assert decode_base58_check(enc) == b"test payload"
    corrupted = enc[:-1] + ("r" if enc[-1] != "r" else "p")
    with pytest.raises(ValidationError):
        decode_base58_check(corrupted)


def test_account_zero():
    assert encode_account_id(b"\x00" * 20) == ACCOUNT_ZERO
    assert decode_account_id(ACCOUNT_ZERO) == b"\x00" * 20


def test_decode_account_id_rejects_bad_input():
    assert len(decode_account_id(GENESIS_ADDRESS)) == 20
    for bad in ["", None, 42, "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTi", "xyz"]:
        with pytest.raises(ValidationError):
            decode_account_id(bad)
    with pytest.raises(ValidationError):
        encode_account_id(b"\x01" * 19)


def test_sha512_half_is_32_bytes():
    assert len(sha512_half(b"abc")) == 32


def test_signature_codec():
    raw = bytes(range(65))
    text = encode_signature(raw)
    assert text == base64.b64encode(raw).decode()
    assert decode_signature(text) == raw
    assert decode_signature("YWI=") == b"ab"
    assert decode_signature("YQ==") == b"a"


@pytest.mark.parametrize("bad", [
    "",
    "abc==",
    "ab=c",
    "YWJj=",
    "YQ=",
    "YW J j",
    "YWJj\n",
    "!!!!",
    None,
    b"YWJj",
])
def test_signature_codec_rejects_bad_text(bad):
    with pytest.raises(InvalidSignatureEncodingError):
        decode_signature(bad)
