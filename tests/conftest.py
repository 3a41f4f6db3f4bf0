import pytest

from hybridcrypt.audit_service import AuditLog
from hybridcrypt.keygen import generate_keypair
from hybridcrypt.rsa_block import PrivateKey, PublicKey

# Textbook pair: p=61, q=53
TEXTBOOK_N = 3233
TEXTBOOK_E = 17
TEXTBOOK_D = 2753


@pytest.fixture
def textbook_keys():
    return PublicKey(n=TEXTBOOK_N, e=TEXTBOOK_E), PrivateKey(n=TEXTBOOK_N, d=TEXTBOOK_D)


@pytest.fixture(scope="session")
def word_keys():
    return generate_keypair(bits=64)


@pytest.fixture(scope="session")
def other_word_keys():
    return generate_keypair(bits=64)


@pytest.fixture
def audit_log(tmp_path):
    return AuditLog(tmp_path / "logs" / "audit.log")
