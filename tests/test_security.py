"""Tests for hashing helpers"""
import pytest

from expire_passwords.utils.security import (
    generate_secure_token, hash_password, hash_token, tokens_match, verify_password)


def test_hash_and_verify_password():
    stored = hash_password('correct horse', rounds=4)
    assert stored != 'correct horse'
    assert verify_password('correct horse', stored)
    assert not verify_password('wrong horse', stored)


def test_verify_rejects_empty_and_malformed():
    assert not verify_password('', hash_password('x', rounds=4))
    assert not verify_password('x', '')
    assert not verify_password('x', 'not-a-bcrypt-hash')


def test_overlong_password_is_refused():
    with pytest.raises(ValueError):
        hash_password('x' * 73, rounds=4)


def test_token_digest_matching():
    token = generate_secure_token()
    assert tokens_match(token, hash_token(token))
    assert not tokens_match(token + 'x', hash_token(token))
