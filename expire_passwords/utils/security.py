# expire_passwords/utils/security.py
"""Security utilities for Expire Passwords
Password hashing uses bcrypt; reset keys and session tokens are stored as SHA-256
"""
import hashlib
import hmac
import secrets

import bcrypt

DEFAULT_BCRYPT_ROUNDS = 12
BCRYPT_MAX_PASSWORD_BYTES = 72

def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash password using bcrypt

    Args:
        password: Plain text password
        rounds: bcrypt work factor

    Returns:
        bcrypt hash as text

    Raises:
        ValueError: if the password is longer than bcrypt accepts
    """
    encoded = password.encode('utf-8')
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f'Password exceeds {BCRYPT_MAX_PASSWORD_BYTES} bytes')
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode('utf-8')

def verify_password(password: str, stored_hash: str) -> bool:
    """
    Verify password against stored hash using bcrypt's constant-time check

    Args:
        password: Plain text password to verify
        stored_hash: bcrypt hash produced by hash_password

    Returns:
        True if password matches, False otherwise
    """
    if not password or not stored_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), stored_hash.encode('utf-8'))
    except ValueError:
        # Malformed hash or over-long password can never match
        return False

def generate_secure_token(length: int = 32) -> str:
    """
    Generate cryptographically secure URL-safe token

    Args:
        length: Number of random bytes

    Returns:
        URL-safe text token
    """
    return secrets.token_urlsafe(length)

def hash_token(token: str) -> str:
    """SHA-256 hex digest of a session token or reset key"""
    return hashlib.sha256(token.encode('utf-8')).hexdigest()

def tokens_match(token: str, stored_digest: str) -> bool:
    """Compare a raw token against a stored digest in constant time"""
    return hmac.compare_digest(hash_token(token), stored_digest)
