import pytest

from ledgersig.crypto import (
    PrivateKey, PublicKey, Seed, SeedDeriver, resolve_secret_key, to_key_input,
)
from ledgersig.exceptions import (
    InvalidAccountError, InvalidSeedError, KeyDerivationError, ValidationError,
)
from ledgersig.types import DirectKey, SeedKey

GENESIS_SEED = "snoPBrXtMeMyMHUVTgbuqAfg1SUTb"
GENESIS_SEED_HEX = "DEDCE9CE67B451D852FD4E846FCDE31C"
GENESIS_ADDRESS = "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh"
GENESIS_PUBLIC_KEY = "0330e7fc9d56bb25d6893ba3f317ae5bcf33b3291bd63db32654a313222f7fd020"


def test_passphrase_seed_vector():
    seed = Seed.from_json("masterpassphrase")
    assert seed.entropy.hex().upper() == GENESIS_SEED_HEX
    assert seed.to_json() == GENESIS_SEED


def test_seed_formats_agree():
    assert Seed.from_json(GENESIS_SEED) == Seed.from_json(GENESIS_SEED_HEX)
    assert Seed.from_json(bytes.fromhex(GENESIS_SEED_HEX)) == Seed.from_json("masterpassphrase")


def test_default_account_key():
    key = Seed.from_json(GENESIS_SEED).get_key()
    assert key.public_key().hex() == GENESIS_PUBLIC_KEY
    assert key.address() == GENESIS_ADDRESS


def test_get_key_by_address_and_index():
    seed = Seed.from_json(GENESIS_SEED)
    assert seed.get_key(GENESIS_ADDRESS) == seed.get_key(0)
    assert seed.get_key(1) != seed.get_key(0)
    with pytest.raises(KeyDerivationError):
        seed.get_key("rrrrrrrrrrrrrrrrrrrrrhoLvTp")
    with pytest.raises(InvalidAccountError):
        seed.get_key("not-an-address")
    with pytest.raises(KeyDerivationError):
        seed.get_key(-1)


def test_get_key_searches_up_to_max_loops():
    seed = Seed.generate()
    second = seed.get_key(1)
    with pytest.raises(KeyDerivationError):
        seed.get_key(second.address())
    assert seed.get_key(second.address(), max_loops=3) == second


@pytest.mark.parametrize("bad", ["", None, 7, b"\x01" * 15])
def test_invalid_seed(bad):
    with pytest.raises(InvalidSeedError):
        Seed.from_json(bad)


@pytest.mark.parametrize("text", ["sesame open", "sBadSeedWithBadChecksum", GENESIS_SEED[:-1] + "c"])
def test_undecodable_family_seed_is_a_passphrase(text):
    assert Seed.from_json(text) == Seed.from_passphrase(text)


def test_seed_hex_with_trailing_newline_is_a_passphrase():
    text = GENESIS_SEED_HEX + "\n"
    assert Seed.from_json(text) == Seed.from_passphrase(text)
    assert Seed.from_json(text) != Seed.from_json(GENESIS_SEED_HEX)


def test_seed_repr_hides_entropy():
    assert GENESIS_SEED_HEX.lower() not in repr(Seed.from_json(GENESIS_SEED)).lower()


def test_private_key_basics():
    key = PrivateKey("11" * 32)
    assert PrivateKey(key) == key
    assert PrivateKey(bytes.fromhex("11" * 32)) == key
    assert "1111...1111" in repr(key)
    assert len(key.public_key().point) == 33
    with pytest.raises(ValidationError):
        PrivateKey("00" * 32)
    assert PrivateKey.create() != PrivateKey.create()


def test_public_key_parsing():
    pub = PublicKey(GENESIS_PUBLIC_KEY)
    assert pub.hex() == GENESIS_PUBLIC_KEY
    assert pub == PublicKey(GENESIS_PUBLIC_KEY.upper())
    assert pub.address() == GENESIS_ADDRESS
    with pytest.raises(ValidationError):
        PublicKey("02" + "00" * 32)
    with pytest.raises(ValidationError):
        PublicKey("05" + "11" * 32)


def test_resolver_passes_direct_key_through():
    key = PrivateKey("22" * 32)
    assert resolve_secret_key(key) is key
    assert resolve_secret_key(DirectKey(key), account=GENESIS_ADDRESS) is key


def test_resolver_delegates_seed_material():
    assert resolve_secret_key("masterpassphrase").address() == GENESIS_ADDRESS
    assert resolve_secret_key(SeedKey(GENESIS_SEED, GENESIS_ADDRESS)).address() == GENESIS_ADDRESS
    with pytest.raises(InvalidSeedError):
        resolve_secret_key("")
    with pytest.raises(InvalidSeedError):
        resolve_secret_key(3.14)


def test_resolver_uses_injected_deriver():
    expected = PrivateKey("33" * 32)
    
    class Deriver(SeedDeriver):
        def __init__(self):
            super().__init__()
            self.calls = []
            
        def derive(self, seed_material, account=None):
            self.calls.append((seed_material, account))
            return expected
            
    deriver = Deriver()
    assert resolve_secret_key("anything", 2, deriver) is expected
    assert deriver.calls == [("anything", 2)]


def test_to_key_input():
    key = PrivateKey("44" * 32)
    assert to_key_input(key) == DirectKey(key)
    assert to_key_input("seed", 1) == SeedKey("seed", 1)
    assert to_key_input(SeedKey("seed"), 3) == SeedKey("seed", 3)
    assert to_key_input(SeedKey("seed", 1), 3) == SeedKey("seed", 1)
