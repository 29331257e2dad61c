# -*- coding: utf-8 -*-
"""
Decode/validate engines for encoded DH parameters.

Two interchangeable backends share the :class:`Backend` interface:

* :class:`CryptographyBackend` reads the ASN.1 structure, validates with
  :mod:`dhparams.crypto.check` and re-encodes through ``cryptography`` (OpenSSL);
* :class:`DummyBackend` is used when no cryptographic library is configured.
  It reports ``supports_dh() == False``; DER decoding is a logged no-op and PEM
  decoding fails with ``INVALID_INPUT_DATA``.

The process-wide backend is chosen once from :func:`dhparams.config.load_settings`.
"""
from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Protocol

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend

from dhparams import config
from dhparams.crypto import check
from dhparams.crypto import dh as dh_helpers

__all__ = [
    "Error",
    "EncodingFormat",
    "DecodeResult",
    "Backend",
    "CryptographyBackend",
    "DummyBackend",
    "create_backend",
    "get_backend",
    "reset_backend",
]

log = logging.getLogger(__name__)


class Error(enum.Enum):
    NO_ERROR = "no error"
    INVALID_INPUT_DATA = "invalid input data"
    UNSAFE_PARAMETERS = "the given Diffie-Hellman parameters are deemed unsafe"

    @property
    def message(self) -> str:
        return self.value


class EncodingFormat(enum.Enum):
    DER = "der"
    PEM = "pem"

    @classmethod
    def coerce(cls, value: EncodingFormat | str) -> EncodingFormat:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown encoding {value!r}; expected 'der' or 'pem'") from None


@dataclass(frozen=True)
class DecodeResult:
    der: bytes | None = None
    error: Error = Error.NO_ERROR


_EMPTY = DecodeResult()
_INVALID = DecodeResult(error=Error.INVALID_INPUT_DATA)
_UNSAFE = DecodeResult(error=Error.UNSAFE_PARAMETERS)

# exceptions raised for input that cannot be decoded or re-encoded
_LOAD_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm)


class Backend(Protocol):
    name: str

    def supports_dh(self) -> bool: ...

    def decode_der(self, data: bytes) -> DecodeResult: ...

    def decode_pem(self, data: bytes) -> DecodeResult: ...

    def decode(self, data: bytes, encoding: EncodingFormat) -> DecodeResult: ...


class _BaseBackend:
    name = "base"

    def decode(self, data: bytes, encoding: EncodingFormat | str) -> DecodeResult:
        encoding = EncodingFormat.coerce(encoding)
        if encoding is EncodingFormat.DER:
            return self.decode_der(data)
        return self.decode_pem(data)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


# ────────────────────────────────────────────────────────────────────────────
#  cryptography / OpenSSL
# ────────────────────────────────────────────────────────────────────────────
class CryptographyBackend(_BaseBackend):
    """Decoder that hands every structurally valid ``(p, g)`` to the validator."""

    name = config.BACKEND_CRYPTOGRAPHY

    def __init__(self, min_bits: int = config.MIN_MODULUS_BITS):
        self.min_bits = min_bits
        self._lock = threading.Lock()
        self._version: str | None = None

    # ---------------------------------------------------------------- public
    def ensure_initialized(self) -> str:
        """Bind the OpenSSL backend on first use. Safe to call from any thread."""
        with self._lock:
            if self._version is None:
                self._version = default_backend().openssl_version_text()
                log.debug("DH backend ready: %s", self._version)
            return self._version

    def supports_dh(self) -> bool:
        return True

    def decode_der(self, data: bytes) -> DecodeResult:
        if not data:
            return _INVALID

        self.ensure_initialized()
        try:
            p, g = dh_helpers.decode_der(data)
        except _LOAD_ERRORS as exc:
            log.debug("DER parameters rejected: %s", exc)
            return _INVALID

        if not self._is_safe(p, g):
            return _UNSAFE
        # DER input is already canonical
        return DecodeResult(der=bytes(data))

    def decode_pem(self, data: bytes) -> DecodeResult:
        if not data:
            return _INVALID
        if not self.supports_dh():
            return _INVALID

        self.ensure_initialized()
        try:
            p, g = dh_helpers.decode_pem(data)
        except _LOAD_ERRORS as exc:
            log.debug("PEM parameters rejected: %s", exc)
            return _INVALID

        if not self._is_safe(p, g):
            return _UNSAFE

        try:
            der = dh_helpers.to_der(dh_helpers.from_numbers(p, g))
        except _LOAD_ERRORS as exc:
            log.debug("could not re-encode PEM parameters as DER: %s", exc)
            return _INVALID
        if not der:
            return _INVALID
        return DecodeResult(der=der)

    # ---------------------------------------------------------------- intern
    def _is_safe(self, p: int, g: int) -> bool:
        return check.assess(p, g, min_bits=self.min_bits).safe


# ────────────────────────────────────────────────────────────────────────────
#  No crypto library configured
# ────────────────────────────────────────────────────────────────────────────
class DummyBackend(_BaseBackend):
    name = config.BACKEND_DUMMY

    def supports_dh(self) -> bool:
        return False

    def decode_der(self, data: bytes) -> DecodeResult:
        log.warning("DiffieHellmanParameters: DER decoding is not implemented "
                    "without a cryptographic backend")
        return _EMPTY

    def decode_pem(self, data: bytes) -> DecodeResult:
        log.warning("DiffieHellmanParameters: PEM decoding is not implemented "
                    "without a cryptographic backend")
        return _INVALID


# ────────────────────────────────────────────────────────────────────────────
#  Process-wide selection
# ────────────────────────────────────────────────────────────────────────────
_LOCK = threading.Lock()
_backend: Backend | None = None

_FACTORIES = {
    config.BACKEND_CRYPTOGRAPHY: CryptographyBackend,
    config.BACKEND_DUMMY: DummyBackend,
}


def create_backend(name: str) -> Backend:
    try:
        return _FACTORIES[name]()
    except KeyError:
        raise ValueError(f"Unknown DH backend {name!r}") from None


def get_backend() -> Backend:
    """Return the configured backend, creating it on first call."""
    global _backend
    with _LOCK:
        if _backend is None:
            _backend = create_backend(config.load_settings()["backend"])
            log.debug("selected DH backend %r", _backend.name)
        return _backend


def reset_backend(backend: Backend | None = None) -> None:
    """Replace (or with ``None``, forget) the process-wide backend."""
    global _backend
    with _LOCK:
        _backend = backend
