"""Password hashing for the Fios G1000 login."""

import hashlib


def hash_password(password: str, salt: str) -> str:
    """
    Replicate the admin UI's login hash: ``SHA-512(password + passwordSalt)``
    over the UTF-8 bytes, as lowercase hex.  The salt comes from
    ``GET /api/login`` and changes with every login attempt.
    """
    hasher = hashlib.sha512()
    hasher.update(password.encode("utf-8"))
    hasher.update(salt.encode("utf-8"))
    return hasher.hexdigest()
