from oneepay.common.hashing import digest


def test_digest_is_base64_sha1():
    assert digest("abc") == "qZk+NkcGgWq6PiVxeFDCbJzQ2J0="


def test_digest_of_empty_string():
    assert digest("") == "2jmj7l5rSw0yVb/vlWAYkK/YBwk="


def test_digest_is_stable():
    assert digest("client-123:s3cret") == digest("client-123:s3cret")
    assert digest("client-123:s3cret") != digest("client-123:s3creT")
