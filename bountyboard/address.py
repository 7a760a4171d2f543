"""Deterministic test wallet addresses in bech32 form."""

from __future__ import annotations

import hashlib

from Crypto.Hash import RIPEMD160
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_CHARSET_INDEX = {char: index for index, char in enumerate(_CHARSET)}
_GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_MAX_LENGTH = 90
_SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

DEFAULT_PREFIX = "cosmos"


def _polymod(values: list[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = ((checksum & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATORS):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _expand_hrp(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _create_checksum(hrp: str, data: list[int]) -> list[int]:
    polymod = _polymod(_expand_hrp(hrp) + data + [0] * 6) ^ 1
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]


def _convert_bits(data, from_bits: int, to_bits: int, pad: bool) -> list[int]:
    accumulator = 0
    bits = 0
    result: list[int] = []
    max_value = (1 << to_bits) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise ValueError("invalid data value")
        accumulator = (accumulator << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((accumulator >> bits) & max_value)
    if pad:
        if bits:
            result.append((accumulator << (to_bits - bits)) & max_value)
    elif bits >= from_bits or ((accumulator << (to_bits - bits)) & max_value):
        raise ValueError("invalid padding")
    return result


def _check_hrp(hrp: str) -> None:
    if not hrp:
        raise ValueError("empty human-readable part")
    if any(ord(c) < 33 or ord(c) > 126 for c in hrp):
        raise ValueError("invalid character in human-readable part")


def bech32_encode(hrp: str, data: bytes) -> str:
    """Encode bytes under a human-readable prefix as a bech32 string."""
    _check_hrp(hrp)
    hrp = hrp.lower()
    words = _convert_bits(data, 8, 5, pad=True)
    combined = words + _create_checksum(hrp, words)
    address = hrp + "1" + "".join(_CHARSET[w] for w in combined)
    if len(address) > _MAX_LENGTH:
        raise ValueError("encoded address too long")
    return address


def bech32_decode(address: str) -> tuple[str, bytes]:
    """Split a bech32 string into its prefix and payload bytes.

    Raises ValueError on any malformed input or bad checksum.
    """
    if len(address) > _MAX_LENGTH:
        raise ValueError("address too long")
    if address.lower() != address and address.upper() != address:
        raise ValueError("mixed case in address")
    address = address.lower()
    separator = address.rfind("1")
    if separator < 1:
        raise ValueError("missing separator or empty human-readable part")
    if separator + 7 > len(address):
        raise ValueError("data part too short")
    hrp = address[:separator]
    _check_hrp(hrp)
    try:
        words = [_CHARSET_INDEX[c] for c in address[separator + 1:]]
    except KeyError as exc:
        raise ValueError(f"invalid character {exc.args[0]!r} in data part") from None
    if _polymod(_expand_hrp(hrp) + words) != 1:
        raise ValueError("invalid checksum")
    return hrp, bytes(_convert_bits(words[:-6], 5, 8, pad=False))


def public_key_from_seed(seed: str) -> bytes:
    """Return the compressed secp256k1 public point for the scalar SHA-256(seed)."""
    scalar = int.from_bytes(hashlib.sha256(seed.encode("utf-8")).digest(), "big")
    scalar %= _SECP256K1_ORDER
    if scalar == 0:
        raise ValueError("seed yields an invalid scalar")
    signer = ec.derive_private_key(scalar, ec.SECP256K1())
    return signer.public_key().public_bytes(Encoding.X962, PublicFormat.CompressedPoint)


def address_from_seed(seed: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Derive the bech32 account address for the point generated from seed."""
    sha_digest = hashlib.sha256(public_key_from_seed(seed)).digest()
    account = RIPEMD160.new(sha_digest).digest()
    return bech32_encode(prefix, account)