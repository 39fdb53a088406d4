import os
import pathlib
import sys

import pytest

# Ensure matplotlib uses a non-interactive backend for headless test runs.
os.environ.setdefault("MPLBACKEND", "Agg")

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rsa_core.config import RsaConfig  # noqa: E402
from rsa_core.keygen import generate_keypair  # noqa: E402
from rsa_core.keys import KeyPair, PrivateKey, PublicKey  # noqa: E402


@pytest.fixture
def seeded_config():
    return RsaConfig.seeded(1234)


@pytest.fixture(scope="session")
def keypair_512():
    return generate_keypair(512, config=RsaConfig.seeded(512))


@pytest.fixture(scope="session")
def keypair_1024():
    return generate_keypair(1024, config=RsaConfig.seeded(1024))


@pytest.fixture
def toy_keypair():
    return KeyPair(PublicKey(n=3233, e=17), PrivateKey(n=3233, d=2753))
