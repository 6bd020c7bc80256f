import hmac

import bcrypt
from flask import current_app


def hash_password(plain_password: str) -> str:
    if not isinstance(plain_password, str) or len(plain_password) == 0:
        raise ValueError("Password must be a non-empty string")

    # bcrypt expects bytes
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            password_hash.encode("utf-8")
        )
    except ValueError:
        # malformed hash
        return False


def verify_admin_password(plain_password) -> bool:
    """
    Checks against ADMIN_PASSWORD_HASH (bcrypt) when set, otherwise against
    the plain ADMIN_PASSWORD. With neither configured, login is impossible.
    """
    if not isinstance(plain_password, str) or not plain_password:
        return False

    password_hash = current_app.config.get("ADMIN_PASSWORD_HASH")
    if password_hash:
        return verify_password(plain_password, password_hash)

    expected = current_app.config.get("ADMIN_PASSWORD")
    if not expected:
        current_app.logger.error("ADMIN_PASSWORD / ADMIN_PASSWORD_HASH is not configured")
        return False
    return hmac.compare_digest(plain_password.encode("utf-8"), expected.encode("utf-8"))
