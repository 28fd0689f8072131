from splitstats.common.hashing import fingerprint


def test_deterministic():
    assert fingerprint("key") == fingerprint("key")
    assert fingerprint(("a", 1)) == fingerprint(("a", 1))


def test_distinct():
    keys = ["a", "b", 1, 1.5, ("a", 1), ("a", 2)]
    assert len({fingerprint(k) for k in keys}) == len(keys)


def test_format():
    digest = fingerprint("key")
    assert isinstance(digest, str)
    assert len(digest) == 32
    int(digest, 16)
