# -*- coding: utf-8 -*-
"""
Diffie–Hellman parameters for TLS servers.

:class:`DiffieHellmanParameters` is an immutable value holding the canonical
DER encoding of validated parameters, or the error that prevented them from
being loaded. Errors are recorded, never raised::

    params = DiffieHellmanParameters.from_encoded(pem_bytes, EncodingFormat.PEM)
    if not params.is_valid():
        log.error("cannot use DH parameters: %s", params.error_string())
        params = default_parameters()
"""
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass

from dhparams.backend import (
    Backend,
    DecodeResult,
    EncodingFormat,
    Error,
    get_backend,
)
from dhparams.crypto import dh as dh_helpers
from dhparams.utils import ByteSource, read_all

__all__ = [
    "DiffieHellmanParameters",
    "default_parameters",
    "DEFAULT_PARAMETERS_DER",
]

log = logging.getLogger(__name__)

# The 1024-bit MODP group from RFC 2409 (Second Oakley Group), g = 2.
DEFAULT_PARAMETERS_DER: bytes = base64.b64decode(
    "MIGHAoGBAP//////////yQ/aoiFowjTExmKLgNwc0SkCTgiKZ8x0Agu+pjsTmyJR"
    "Sgh5jjQE3e+VGbPNOkMbMCsKbfJfFDdP4TVtbVHCReSFtXZiXn7G9ExC6aY37WsL"
    "/1y29Aa37e44a/taiZ+lrp8kEXxLH+ZJKGZR7OZTgf//////////AgEC"
)


@dataclass(frozen=True, eq=False, repr=False)
class DiffieHellmanParameters:
    """
    Diffie–Hellman parameters for the server side of a TLS handshake.

    ``DiffieHellmanParameters()`` is the *empty* value: it disables DH key
    exchange when handed to a TLS configuration. Use :meth:`from_encoded`,
    :meth:`from_source` or :func:`default_parameters` to load real
    parameters, then check :meth:`is_valid`.
    """

    der: bytes | None = None
    error: Error = Error.NO_ERROR

    # ---------------------------------------------------------------- build
    @classmethod
    def from_encoded(cls,
                     encoded: bytes,
                     encoding: EncodingFormat | str = EncodingFormat.DER,
                     backend: Backend | None = None) -> DiffieHellmanParameters:
        """Decode and validate *encoded* (DER or PEM)."""
        if not isinstance(encoded, (bytes, bytearray, memoryview)):
            raise TypeError(f"encoded must be bytes, not {type(encoded).__name__}")
        backend = backend or get_backend()
        result = backend.decode(bytes(encoded), EncodingFormat.coerce(encoding))
        return cls._from_result(result)

    @classmethod
    def from_source(cls,
                    source: ByteSource | None,
                    encoding: EncodingFormat | str = EncodingFormat.DER,
                    backend: Backend | None = None) -> DiffieHellmanParameters:
        """Read all of *source* and decode it. ``None`` gives the empty value."""
        if source is None:
            return cls()
        return cls.from_encoded(read_all(source), encoding, backend)

    @classmethod
    def _from_result(cls, result: DecodeResult) -> DiffieHellmanParameters:
        if result.error is not Error.NO_ERROR:
            log.debug("DH parameters not loaded: %s", result.error.message)
        return cls(der=result.der, error=result.error)

    # ---------------------------------------------------------------- query
    def is_empty(self) -> bool:
        return self.der is None and self.error is Error.NO_ERROR

    def is_valid(self) -> bool:
        return self.error is Error.NO_ERROR

    def error_string(self) -> str:
        return self.error.message

    def parameter_numbers(self) -> tuple[int, int] | None:
        """Return ``(p, g)``, or ``None`` when there is no canonical encoding."""
        if self.der is None:
            return None
        return dh_helpers.decode_der(self.der)

    def to_pem(self) -> bytes | None:
        """The canonical encoding as a ``DH PARAMETERS`` PEM block."""
        if self.der is None:
            return None
        return dh_helpers.to_pem(dh_helpers.from_numbers(*dh_helpers.decode_der(self.der)))

    # ---------------------------------------------------------------- dunder
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiffieHellmanParameters):
            return NotImplemented
        return self.der == other.der and self.error is other.error

    def __hash__(self) -> int:
        return self.seeded_hash(0)

    def seeded_hash(self, seed: int) -> int:
        """Hash of the canonical encoding combined with *seed*."""
        return hash((seed, self.der or b""))

    def __repr__(self) -> str:
        encoded = base64.b64encode(self.der or b"").decode("ascii")
        return f"DiffieHellmanParameters({encoded})"


def default_parameters(backend: Backend | None = None) -> DiffieHellmanParameters:
    """The 1024-bit MODP group from RFC 2409, also known as the Second Oakley Group."""
    return DiffieHellmanParameters.from_encoded(
        DEFAULT_PARAMETERS_DER, EncodingFormat.DER, backend
    )
