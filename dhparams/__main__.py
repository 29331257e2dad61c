# -*- coding: utf-8 -*-
"""Command-line front end: ``python -m dhparams``."""
from __future__ import annotations

import argparse
import base64
import logging
import sys
from pathlib import Path

from dhparams import config
from dhparams.backend import Backend, EncodingFormat, create_backend
from dhparams.crypto import check
from dhparams.crypto import dh as dh_helpers
from dhparams.parameters import DiffieHellmanParameters, default_parameters
from dhparams.utils import setup_logging


def _guess_encoding(path: Path, data: bytes) -> EncodingFormat:
    if path.suffix.lower() == ".pem" or b"-----BEGIN" in data:
        return EncodingFormat.PEM
    return EncodingFormat.DER


def _report_reasons(data: bytes, encoding: EncodingFormat, backend: Backend) -> None:
    """Print the validator's findings for material that parses."""
    decode = dh_helpers.decode_pem if encoding is EncodingFormat.PEM else dh_helpers.decode_der
    try:
        p, g = decode(data)
    except (ValueError, TypeError):
        return
    report = check.assess(p, g, min_bits=getattr(backend, "min_bits", config.MIN_MODULUS_BITS))
    print(f"modulus: {report.bits} bits, generator: {g}")
    for reason in report.reasons:
        print(f"  - {reason}")


def cmd_check(args: argparse.Namespace) -> int:
    path = Path(args.file)
    data = path.read_bytes()
    encoding = EncodingFormat.coerce(args.encoding) if args.encoding else _guess_encoding(path, data)

    backend = create_backend(args.backend)
    params = DiffieHellmanParameters.from_encoded(data, encoding, backend)

    if not backend.supports_dh():
        print(f"{path}: backend {backend.name!r} cannot decode DH parameters")
        return 1

    status = "valid" if params.is_valid() and not params.is_empty() else "invalid"
    print(f"{path}: {status} ({params.error_string()})")
    _report_reasons(data, encoding, backend)
    return 0 if status == "valid" else 1


def cmd_default(args: argparse.Namespace) -> int:
    params = default_parameters(create_backend(args.backend))
    if params.der is None:
        print("default parameters unavailable with this backend", file=sys.stderr)
        return 1
    if args.pem:
        sys.stdout.write(params.to_pem().decode("ascii"))
    else:
        print(base64.b64encode(params.der).decode("ascii"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = config.load_settings()
    parser = argparse.ArgumentParser(
        prog="dhparams",
        description="Validate Diffie-Hellman parameters for TLS servers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m dhparams check dhparam.pem
  python -m dhparams check params.der --der
  python -m dhparams default --pem
        """
    )
    parser.add_argument(
        "--backend",
        choices=config.BACKENDS,
        default=settings["backend"],
        help=f"decoding backend (default: {settings['backend']})"
    )
    parser.add_argument(
        "--log-level",
        default=logging.getLevelName(settings["log_level"]),
        help="logging level (default: %(default)s)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="decode and validate a parameter file")
    p_check.add_argument("file", help="DER or PEM encoded DH parameters")
    fmt = p_check.add_mutually_exclusive_group()
    fmt.add_argument("--pem", dest="encoding", action="store_const", const="pem")
    fmt.add_argument("--der", dest="encoding", action="store_const", const="der")
    p_check.set_defaults(func=cmd_check, encoding=None)

    p_default = sub.add_parser("default", help="print the built-in default parameters")
    p_default.add_argument("--pem", action="store_true", help="print as PEM instead of base64 DER")
    p_default.set_defaults(func=cmd_default)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    try:
        parser = build_parser()
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, str(args.log_level).upper(), logging.WARNING),
                  config.load_settings().get("log_file"))
    try:
        return args.func(args)
    except OSError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
