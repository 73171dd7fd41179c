"""Password hashing for the credential store."""

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from pwdlib.hashers.argon2 import Argon2Hasher
from pwdlib.hashers.bcrypt import BcryptHasher

# New hashes use Argon2; bcrypt hashes from older accounts still verify.
_password_hash = PasswordHash((Argon2Hasher(), BcryptHasher()))

# Verified against when the username does not exist, so both login failures cost the same.
_DUMMY_HASH = _password_hash.hash("agenda-dummy-password")


def hash_password(password: str) -> str:
    return _password_hash.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    try:
        return _password_hash.verify(plain_password, hashed_password)
    except UnknownHashError:
        return False


def burn_verification(plain_password: str) -> None:
    _password_hash.verify(plain_password, _DUMMY_HASH)
