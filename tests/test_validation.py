import pytest

from ledgersig.exceptions import InvalidAccountError, InvalidHashError
from ledgersig.types import HexHash, RawHash
from ledgersig.utils import validation as v


def test_normalize_hash_accepts_hex_and_bytes():
    assert v.normalize_hash("00ff") == b"\x00\xff"
    assert v.normalize_hash("ABcd") == b"\xab\xcd"
    assert v.normalize_hash(b"\x01") == b"\x01"
    assert v.normalize_hash(bytearray(b"\x02")) == b"\x02"
    assert v.normalize_hash(HexHash("0a")) == b"\x0a"
    assert v.normalize_hash(RawHash(b"\x0b")) == b"\x0b"


def test_normalize_hash_pads_odd_hex():
    assert v.normalize_hash("abc") == b"\x0a\xbc"
    assert v.normalize_hash("f") == b"\x0f"
    assert v.normalize_hash(HexHash("abc")) == v.normalize_hash("0abc")


@pytest.mark.parametrize("bad", [
    "", "xyz", "0x00", "00 ff", "abc\n", "abcd\n", b"", bytearray(), None, 12,
    [1, 2, 3], HexHash("zz"), RawHash(b""),
])
def test_normalize_hash_rejects(bad):
    with pytest.raises(InvalidHashError):
        v.normalize_hash(bad)


def test_to_hash_input_tags_once():
    assert v.to_hash_input("ab") == HexHash("ab")
    assert v.to_hash_input(b"ab") == RawHash(b"ab")
    tagged = HexHash("ab")
    assert v.to_hash_input(tagged) is tagged


def test_address_validation():
    addr = "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh"
    assert v.is_valid_address(addr)
    assert v.validate_address(addr) == addr
    assert v.AccountAddressCodec().is_valid_account(addr)
    assert not v.AccountAddressCodec().is_valid_account("rInvalid")
    assert not v.is_valid_address(None)
    with pytest.raises(InvalidAccountError):
        v.validate_address("invalid")
    with pytest.raises(InvalidAccountError):
        v.validate_address("")


def test_private_key_validation():
    assert v.is_valid_private_key("11" * 32)
    assert not v.is_valid_private_key("00" * 32)
    assert not v.is_valid_private_key("ff" * 32)
    assert not v.is_valid_private_key(b"\x01" * 31)
    assert not v.is_valid_private_key("11" * 32 + "\n")
