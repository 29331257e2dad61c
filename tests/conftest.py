"""Shared DH parameter vectors and fixtures."""
import base64
import textwrap

import pytest
from Crypto.Util.asn1 import DerSequence

from dhparams import backend as backend_mod
from dhparams.backend import CryptographyBackend, DummyBackend


def _der(b64: str) -> bytes:
    return base64.b64decode("".join(b64.split()))


def pem_wrap(der: bytes, label: str = "DH PARAMETERS") -> bytes:
    body = "\n".join(textwrap.wrap(base64.b64encode(der).decode("ascii"), 64))
    return f"-----BEGIN {label}-----\n{body}\n-----END {label}-----\n".encode("ascii")


def der_encode(p: int, g: int) -> bytes:
    return DerSequence([p, g]).encode()


# ────────────────────────────────────────────────────────────────────────────
#  Moduli
# ────────────────────────────────────────────────────────────────────────────

# RFC 2409 First Oakley Group, 768 bits, p ≡ 23 (mod 24)
P_MODP_768 = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6F44C42E9A63A3620FFFFFFFFFFFFFFFF", 16)

# RFC 2409 Second Oakley Group, 1024 bits, p ≡ 23 (mod 24), p ≡ 7 (mod 10)
P_MODP_1024 = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE65381FFFFFFFFFFFFFFFF", 16)

# RFC 3526 group 14, 2048 bits, p ≡ 23 (mod 24), p ≡ 9 (mod 10)
P_MODP_2048 = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3DC2007CB8A163BF05"
    "98DA48361C55D39A69163FA8FD24CF5F83655D23DCA3AD961C62F356208552BB"
    "9ED529077096966D670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B"
    "E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9DE2BCBF695581718"
    "3995497CEA956AE515D2261898FA051015728E5A8AACAA68FFFFFFFFFFFFFFFF", 16)

# 1024-bit prime, not safe, p ≡ 13 (mod 24)
P_PRIME_13 = int(
    "DE2E1C9C24892FC187A498D2D3EE90653C19BE5B734B260AF76E02B5F41FE7AF"
    "873A727002DA852D3D04FC023E2BE499686D9D04E82A6C6D47029896F5B26A73"
    "39A66EC30DF67A90995F0FE5A447491EFFC8002A670DE566C7A2211B1F7B70AC"
    "2E7AE496D1E08574DA37C1318CEFD8998064776410289A32F687CF2A4AEA0315", 16)

# 1024-bit prime, not safe, p ≡ 23 (mod 24)
P_PRIME_23 = int(
    "F13C4C95021D9150F9DB06B61DA9FE9DF0919C2E57BBAE37D984BFC587F1749B"
    "659777FC4DE2AF3337C5AE01C4858F9A2E5D41158E57343D475193F45677B328"
    "46C8BF1CF33F7D10246B6D90C77BD95A9D3D3C8CDF88B70866801CC2CA97D3AF"
    "DD3F97248A0503AC4109BACEC26C465C20BB9F6511E2B4FE90206904EBC2D727", 16)

# safe primes below the floor, from `openssl prime -generate -safe`
P_SAFE_256 = int("FACE891FB025246D07D7F7919C7FEE2DDBE207F3121FD7F210EA2E989BAA6A5F", 16)
P_SAFE_511 = int(
    "73EB7DF7BD1ACE2B751854D764CA03268B98C54D2D93C732FFCC06965ECBAB9A"
    "4ADBCDA0C18F6BDE206D563F8676CCBB1E4B864AE358B00559C4E03243531D03", 16)

# P_MODP_1024 + 24: composite, still 1024 bits and ≡ 23 (mod 24)
P_COMPOSITE = P_MODP_1024 + 24


# ────────────────────────────────────────────────────────────────────────────
#  DER encodings, SEQUENCE { INTEGER p, INTEGER g }
# ────────────────────────────────────────────────────────────────────────────

DER_MODP_1024 = _der("""
    MIGHAoGBAP//////////yQ/aoiFowjTExmKLgNwc0SkCTgiKZ8x0Agu+pjsTmyJR
    Sgh5jjQE3e+VGbPNOkMbMCsKbfJfFDdP4TVtbVHCReSFtXZiXn7G9ExC6aY37WsL
    /1y29Aa37e44a/taiZ+lrp8kEXxLH+ZJKGZR7OZTgf//////////AgEC
""")

DER_MODP_768 = _der("""
    MGYCYQD//////////8kP2qIhaMI0xMZii4DcHNEpAk4IimfMdAILvqY7E5siUUoI
    eY40BN3vlRmzzTpDGzArCm3yXxQ3T+E1bW1RwkXkhbV2Yl5+xvRMQummOjYg////
    //////8CAQI=
""")

DER_MODP_2048 = _der("""
    MIIBCAKCAQEA///////////JD9qiIWjCNMTGYouA3BzRKQJOCIpnzHQCC76mOxOb
    IlFKCHmONATd75UZs806QxswKwpt8l8UN0/hNW1tUcJF5IW1dmJefsb0TELppjft
    awv/XLb0Brft7jhr+1qJn6WunyQRfEsf5kkoZlHs5Fs9wgB8uKFjvwWY2kg2HFXT
    mmkWP6j9JM9fg2VdI9yjrZYcYvNWIIVSu57VKQdwlpZtZww1Tkq8mATxdGwIyhgh
    fDKQXkYuNs474553LBgOhgObJ4Oi7Aeij7XFXfBvTFLJ3ivL9pVYFxg5lUl86pVq
    5RXSJhiY+gUQFXKOWoqsqmj//////////wIBAg==
""")

DER_PRIME_13 = _der("""
    MIGHAoGBAN4uHJwkiS/Bh6SY0tPukGU8Gb5bc0smCvduArX0H+evhzpycALahS09
    BPwCPivkmWhtnQToKmxtRwKYlvWyanM5pm7DDfZ6kJlfD+WkR0ke/8gAKmcN5WbH
    oiEbH3twrC565JbR4IV02jfBMYzv2JmAZHdkECiaMvaHzypK6gMVAgEC
""")

DER_PRIME_23 = _der("""
    MIGHAoGBAPE8TJUCHZFQ+dsGth2p/p3wkZwuV7uuN9mEv8WH8XSbZZd3/E3irzM3
    xa4BxIWPmi5dQRWOVzQ9R1GT9FZ3syhGyL8c8z99ECRrbZDHe9lanT08jN+Itwhm
    gBzCypfTr90/lySKBQOsQQm6zsJsRlwgu59lEeK0/pAgaQTrwtcnAgEC
""")

DER_COMPOSITE = _der("""
    MIGHAoGBAP//////////yQ/aoiFowjTExmKLgNwc0SkCTgiKZ8x0Agu+pjsTmyJR
    Sgh5jjQE3e+VGbPNOkMbMCsKbfJfFDdP4TVtbVHCReSFtXZiXn7G9ExC6aY37WsL
    /1y29Aa37e44a/taiZ+lrp8kEXxLH+ZJKGZR7OZTggAAAAAAAAAXAgEC
""")

# Second Oakley prime with g = 5 (p ≡ 7 mod 10, suitable)
DER_MODP_1024_G5 = _der("""
    MIGHAoGBAP//////////yQ/aoiFowjTExmKLgNwc0SkCTgiKZ8x0Agu+pjsTmyJR
    Sgh5jjQE3e+VGbPNOkMbMCsKbfJfFDdP4TVtbVHCReSFtXZiXn7G9ExC6aY37WsL
    /1y29Aa37e44a/taiZ+lrp8kEXxLH+ZJKGZR7OZTgf//////////AgEF
""")

PEM_MODP_1024 = pem_wrap(DER_MODP_1024)
PEM_MODP_2048 = pem_wrap(DER_MODP_2048)
PEM_MODP_768 = pem_wrap(DER_MODP_768)


# ────────────────────────────────────────────────────────────────────────────
#  Fixtures
# ────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def crypto_backend():
    return CryptographyBackend()


@pytest.fixture
def dummy_backend():
    return DummyBackend()


@pytest.fixture(autouse=True)
def _fresh_backend(monkeypatch):
    """Each test resolves the process-wide backend from a clean environment."""
    monkeypatch.delenv("DHPARAMS_BACKEND", raising=False)
    backend_mod.reset_backend()
    yield
    backend_mod.reset_backend()
