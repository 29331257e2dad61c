# -*- coding: utf-8 -*-
"""
Safety checks for decoded Diffie–Hellman parameters (p, g).

The structural battery mirrors OpenSSL's ``DH_check`` for parameters without a
subgroup order; :func:`assess` adds the modulus size floor and the IETF
generator correction on top of it.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from Crypto.Math.Primality import COMPOSITE, test_probable_prime

from dhparams.config import MIN_MODULUS_BITS

__all__ = [
    "DHCheck",
    "UNSAFE_FLAGS",
    "SafetyReport",
    "is_probable_prime",
    "dh_check",
    "assess",
    "is_safe_dh",
]

log = logging.getLogger(__name__)


class DHCheck(enum.IntFlag):
    """Result bits of the structural check (same values as OpenSSL)."""

    OK = 0x00
    P_NOT_PRIME = 0x01
    P_NOT_SAFE_PRIME = 0x02
    UNABLE_TO_CHECK_GENERATOR = 0x04
    NOT_SUITABLE_GENERATOR = 0x08


UNSAFE_FLAGS = (
    DHCheck.P_NOT_PRIME
    | DHCheck.P_NOT_SAFE_PRIME
    | DHCheck.NOT_SUITABLE_GENERATOR
)

_REASONS = {
    DHCheck.P_NOT_PRIME: "modulus p is not prime",
    DHCheck.P_NOT_SAFE_PRIME: "modulus p is not a safe prime ((p-1)/2 is composite)",
    DHCheck.UNABLE_TO_CHECK_GENERATOR: "generator g could not be checked for suitability",
    DHCheck.NOT_SUITABLE_GENERATOR: "generator g is not suitable for p",
}


@dataclass(frozen=True)
class SafetyReport:
    """Verdict of :func:`assess` together with what led to it."""
    safe: bool
    bits: int
    flags: DHCheck
    reasons: tuple[str, ...]

    def __bool__(self) -> bool:
        return self.safe


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

def is_probable_prime(n: int) -> bool:
    """Miller–Rabin followed by a Lucas test (pycryptodome)."""
    if n < 2:
        return False
    return test_probable_prime(n) != COMPOSITE


def _generator_flags(p: int, g: int) -> DHCheck:
    flags = DHCheck.OK
    if g <= 1 or g >= p - 1:
        flags |= DHCheck.NOT_SUITABLE_GENERATOR

    if g == 2:
        if p % 24 != 11:
            flags |= DHCheck.NOT_SUITABLE_GENERATOR
    elif g == 5:
        if p % 10 not in (3, 7):
            flags |= DHCheck.NOT_SUITABLE_GENERATOR
    else:
        flags |= DHCheck.UNABLE_TO_CHECK_GENERATOR
    return flags


def dh_check(p: int, g: int) -> DHCheck:
    """Run the structural battery and return the raised :class:`DHCheck` bits."""
    flags = _generator_flags(p, g)

    if not is_probable_prime(p):
        flags |= DHCheck.P_NOT_PRIME
    elif not is_probable_prime(p >> 1):
        flags |= DHCheck.P_NOT_SAFE_PRIME
    return flags


# ---------------------------------------------------------------------------
# Verdict
# ---------------------------------------------------------------------------

def assess(p: int, g: int, min_bits: int = MIN_MODULUS_BITS) -> SafetyReport:
    """
    Decide whether (p, g) may be used for key exchange.

    Moduli shorter than *min_bits* are rejected before any other check. The
    unsuitable-generator bit is cleared for g = 2 when p ≡ 11 or 23 (mod 24):
    OpenSSL only accepts 11, while the IETF MODP primes are all ≡ 23.
    """
    bits = p.bit_length()
    if bits < min_bits:
        return SafetyReport(
            safe=False,
            bits=bits,
            flags=DHCheck.OK,
            reasons=(f"modulus p is {bits} bits, below the {min_bits}-bit minimum",),
        )

    flags = dh_check(p, g)

    if g == 2 and p % 24 in (11, 23):
        flags &= ~DHCheck.NOT_SUITABLE_GENERATOR

    reasons = tuple(text for flag, text in _REASONS.items() if flag in flags)
    safe = not (flags & UNSAFE_FLAGS)
    if not safe:
        log.debug("rejecting %d-bit DH parameters: %s", bits, "; ".join(reasons))
    return SafetyReport(safe=safe, bits=bits, flags=flags, reasons=reasons)


def is_safe_dh(p: int, g: int) -> bool:
    return assess(p, g).safe
