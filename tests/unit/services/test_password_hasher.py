def test_hash_and_verify(passwords):
    password_hash = passwords.hash("Password123")

    assert password_hash != "Password123"
    assert passwords.verify("Password123", password_hash)
    assert not passwords.verify("Password124", password_hash)


def test_verify_without_stored_hash_is_false(passwords):
    assert not passwords.verify("Password123", None)
