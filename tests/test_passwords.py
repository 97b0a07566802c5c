"""Password hashing: bcrypt round-trips, cost factors, malformed hashes."""

from aftercare.auth.password import (
    TimingShield,
    hash_password,
    hash_rounds,
    needs_rehash,
    verify_password,
)


def test_hash_is_salted():
    """Hashing the same password twice gives different strings."""
    h1 = hash_password("Passw0rd!", rounds=4)
    h2 = hash_password("Passw0rd!", rounds=4)
    assert h1 != h2
    assert "Passw0rd!" not in h1


def test_verify_correct_and_wrong_password():
    h = hash_password("Passw0rd!", rounds=4)
    assert verify_password("Passw0rd!", h)
    assert not verify_password("passw0rd!", h)


def test_malformed_hash_is_a_mismatch():
    assert verify_password("Passw0rd!", "not-a-bcrypt-hash") is False
    assert verify_password("Passw0rd!", "") is False


def test_long_passwords_compare_on_first_72_bytes():
    base = "A1" + "x" * 70
    h = hash_password(base + "tail-one", rounds=4)
    assert verify_password(base + "tail-two", h)


def test_hash_rounds_and_needs_rehash():
    h = hash_password("Passw0rd!", rounds=4)
    assert hash_rounds(h) == 4
    assert not needs_rehash(h, 4)
    assert needs_rehash(h, 5)
    assert hash_rounds("garbage") is None


def test_timing_shield_burn_returns_nothing():
    shield = TimingShield(rounds=4)
    assert shield.burn("anything") is None
