import pytest

from honeypot_radar.models import ZERO_ADDRESS
from honeypot_radar.utils.addr import is_zero_address, normalize_evm_address, same_address

from conftest import TOKEN


class TestNormalizeAddress:

    def test_checksums_lowercase(self):
        assert normalize_evm_address(TOKEN.lower()) == TOKEN

    def test_strips_whitespace(self):
        assert normalize_evm_address(f"  {TOKEN}\n") == TOKEN

    @pytest.mark.parametrize("raw,fragment", [
        ("0x1234...abcd", "Ellipses"),
        ("0xdead", "42 characters"),
        ("", "42 characters"),
        ("ab" * 21, "42 characters"),
        ("0x" + "zz" * 20, "not a valid hex"),
    ])
    def test_rejects(self, raw, fragment):
        with pytest.raises(ValueError, match=fragment):
            normalize_evm_address(raw)


class TestAddressHelpers:

    def test_same_address_ignores_case(self):
        assert same_address(TOKEN, TOKEN.lower())
        assert not same_address(TOKEN, ZERO_ADDRESS)

    def test_zero_address(self):
        assert is_zero_address(ZERO_ADDRESS)
        assert is_zero_address("")
        assert not is_zero_address(TOKEN)
