"""Password hashing and token generation."""

from timetrack.core.security import hash_password, new_session_token, new_timer_id, verify_password


def test_same_password_hashes_differently_per_call():
    # Two users picking the same password must not share a stored hash.
    first = hash_password("pw1", rounds=4)
    second = hash_password("pw1", rounds=4)

    assert first != second
    assert verify_password("pw1", first)
    assert verify_password("pw1", second)


def test_verify_rejects_wrong_password():
    hashed = hash_password("correct horse", rounds=4)

    assert not verify_password("battery staple", hashed)


def test_verify_rejects_missing_or_malformed_hash():
    assert not verify_password("pw1", None)
    assert not verify_password("pw1", "")
    # A hex digest from the legacy unsalted scheme is not a bcrypt hash.
    assert not verify_password("pw1", "ab" * 64)


def test_long_passwords_are_accepted():
    long_password = "x" * 200
    hashed = hash_password(long_password, rounds=4)

    assert verify_password(long_password, hashed)


def test_session_tokens_are_unique_and_long():
    tokens = {new_session_token() for _ in range(200)}

    assert len(tokens) == 200
    assert all(len(token) >= 40 for token in tokens)


def test_timer_ids_are_unique():
    ids = {new_timer_id() for _ in range(200)}

    assert len(ids) == 200
