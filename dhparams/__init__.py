"""Diffie–Hellman parameters for TLS servers: decoding and safety validation."""
from dhparams.backend import EncodingFormat, Error, get_backend
from dhparams.parameters import DiffieHellmanParameters, default_parameters

__all__ = [
    "DiffieHellmanParameters",
    "EncodingFormat",
    "Error",
    "default_parameters",
    "supports_dh",
]


def supports_dh() -> bool:
    """Whether the configured backend can decode DH parameters at all."""
    return get_backend().supports_dh()
