"""
Password hashing and identifier generation
"""
import secrets
import string
import uuid

from passlib.context import CryptContext

# pbkdf2 is pure-python in passlib, no native backend needed
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_TICKET_ALPHABET = string.ascii_uppercase + string.digits


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def new_id(prefix: str) -> str:
    """Prefixed opaque identifier, e.g. evt-3f9c1a2b7d4e"""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def new_ticket_code() -> str:
    """Display code printed on a ticket; not a security token"""
    return "TKT" + "".join(secrets.choice(_TICKET_ALPHABET) for _ in range(8))
