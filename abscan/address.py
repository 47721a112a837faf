"""Twenty-byte account addresses with checksummed hex form."""

from __future__ import annotations

import binascii
from dataclasses import dataclass

from Crypto.Hash import keccak

ADDRESS_LENGTH = 20


@dataclass(frozen=True)
class Address:
    """An account or contract address."""

    value: bytes = bytes(ADDRESS_LENGTH)

    def __post_init__(self) -> None:
        if len(self.value) != ADDRESS_LENGTH:
            raise ValueError(
                f"address must be {ADDRESS_LENGTH} bytes, got {len(self.value)}"
            )

    @classmethod
    def from_hex(cls, text: str) -> "Address":
        """Parse hex text; longer input keeps its last 20 bytes, shorter is left-padded."""
        if text[:2] in ("0x", "0X"):
            text = text[2:]
        if len(text) % 2:
            text = "0" + text
        try:
            raw = binascii.unhexlify(text)
        except binascii.Error as exc:
            raise ValueError(f"invalid hex address: {text!r}") from exc
        if len(raw) > ADDRESS_LENGTH:
            raw = raw[-ADDRESS_LENGTH:]
        return cls(raw.rjust(ADDRESS_LENGTH, b"\x00"))

    def to_checksum(self) -> str:
        """Return the mixed-case checksummed hex form with 0x prefix."""
        lower = self.value.hex()
        digest = keccak.new(digest_bits=256, data=lower.encode("ascii")).digest()
        chars = []
        for position, char in enumerate(lower):
            nibble = digest[position // 2]
            nibble = nibble >> 4 if position % 2 == 0 else nibble & 0x0F
            chars.append(char.upper() if char.isalpha() and nibble > 7 else char)
        return "0x" + "".join(chars)

    def is_zero(self) -> bool:
        return not any(self.value)

    def __str__(self) -> str:
        return self.to_checksum()


ZERO_ADDRESS = Address()


def is_same_address(address1: Address, address2: Address) -> bool:
    return address1 == address2