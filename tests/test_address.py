import pytest

from abscan.address import ZERO_ADDRESS, Address, is_same_address


def test_checksum_known_vector():
    text = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
    assert Address.from_hex(text.lower()).to_checksum() == text


def test_checksum_second_vector():
    text = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
    assert str(Address.from_hex(text.upper().replace("0X", "0x"))) == text


def test_checksum_round_trip():
    address = Address.from_hex("0xf4905b9bc02Ce21C98Eac1803693A9357D5253bf")
    assert Address.from_hex(address.to_checksum()) == address
    assert address.to_checksum().lower() == "0xf4905b9bc02Ce21C98Eac1803693A9357D5253bf".lower()


def test_empty_hex_is_zero():
    address = Address.from_hex("")
    assert address == ZERO_ADDRESS
    assert address.is_zero()


def test_short_hex_left_padded():
    address = Address.from_hex("0x01")
    assert address.value == bytes(19) + b"\x01"
    assert not address.is_zero()


def test_long_hex_keeps_last_bytes():
    base = "4BFB4297f9C28a373aE6ae58a8f8EfeFF334cae8"
    assert Address.from_hex("0xffff" + base) == Address.from_hex(base)


def test_invalid_hex_raises():
    with pytest.raises(ValueError):
        Address.from_hex("0xzz")


def test_wrong_length_raises():
    with pytest.raises(ValueError):
        Address(b"\x01\x02")


def test_is_same_address():
    a = Address.from_hex("0x4BFB4297f9C28a373aE6ae58a8f8EfeFF334cae8")
    b = Address.from_hex("0x4bfb4297f9c28a373ae6ae58a8f8efeff334cae8")
    assert is_same_address(a, b)
    assert not is_same_address(a, ZERO_ADDRESS)