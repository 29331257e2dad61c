# -*- coding: utf-8 -*-
"""
Diffie–Hellman parameter helpers.
- decode_der() / decode_pem() → (p, g) from encoded material, structure only.
- from_numbers() → ``cryptography`` DHParameters.
- to_der() / to_pem() → PKCS#3 encodings.

Decoding goes through pycryptodome's ASN.1 reader, which checks the
``SEQUENCE { INTEGER p, INTEGER g }`` shape and nothing else. ``cryptography``
refuses small moduli and out-of-range generators at load time, so it only sees
parameters the validator has already accepted.
"""
import re

from Crypto.IO import PEM
from Crypto.Util.asn1 import DerSequence
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dh

__all__ = [
    "decode_der",
    "decode_pem",
    "from_numbers",
    "to_der",
    "to_pem",
]

PEM_LABEL = "DH PARAMETERS"

_PEM_BLOCK = re.compile(
    rb"-----BEGIN DH PARAMETERS-----.*?-----END DH PARAMETERS-----",
    re.DOTALL,
)


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

def decode_der(data: bytes) -> tuple[int, int]:
    """Parse a DER ``DHParameter`` SEQUENCE into ``(p, g)``.

    Raises ``ValueError`` when *data* is not exactly one SEQUENCE of two
    INTEGERs. Sizes and ranges are not looked at.
    """
    seq = DerSequence()
    seq.decode(bytes(data), strict=True, nr_elements=2, only_ints_expected=True)
    return seq[0], seq[1]


def decode_pem(data: bytes) -> tuple[int, int]:
    """Parse the first ``DH PARAMETERS`` PEM block found in *data*."""
    match = _PEM_BLOCK.search(bytes(data))
    if match is None:
        raise ValueError(f"no {PEM_LABEL} block found")
    der, _marker, _encrypted = PEM.decode(match.group(0).decode("ascii"))
    return decode_der(der)


def from_numbers(p: int, g: int) -> dh.DHParameters:
    return dh.DHParameterNumbers(p, g).parameters()


def to_der(parameters: dh.DHParameters) -> bytes:
    return parameters.parameter_bytes(
        serialization.Encoding.DER,
        serialization.ParameterFormat.PKCS3,
    )


def to_pem(parameters: dh.DHParameters) -> bytes:
    return parameters.parameter_bytes(
        serialization.Encoding.PEM,
        serialization.ParameterFormat.PKCS3,
    )
