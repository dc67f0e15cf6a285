"""Tests for signing.py module.

Tests signature key selection, value escaping and the digest itself.
"""

import hashlib

from cloudinary_upload.signing import (
    SIGNATURE_KEYS,
    escape_value,
    sign_request,
    signable_params,
)


class TestSignRequest:
    """Tests for sign_request function."""

    def test_upload_vector(self):
        """Should ignore file and sign public_id and timestamp."""
        params = {"timestamp": 1315060510, "public_id": "sample", "file": "foo bar"}

        assert sign_request(params, "abcd") == "c3470533147774275dd37996cc4d0e68fd03cd4f"

    def test_destroy_vector(self):
        """Should include type when present."""
        params = {"timestamp": 1315060510, "public_id": "sample", "type": "upload"}

        assert sign_request(params, "abcd") == "9c549a22def9e2690384973d77b3ff79d7b734d7"

    def test_ignores_api_key_and_signature(self):
        """Should give the same digest whatever non-signable keys are present."""
        params = {"timestamp": 1315060510, "public_id": "sample"}
        noisy = {**params, "api_key": "1234", "signature": "x", "resource_type": "raw"}

        assert sign_request(noisy, "abcd") == sign_request(params, "abcd")

    def test_independent_of_insertion_order(self):
        """Should sort by the fixed key order, not the mapping order."""
        a = {"type": "upload", "timestamp": 1, "public_id": "x", "tags": "a,b"}
        b = {"public_id": "x", "tags": "a,b", "timestamp": 1, "type": "upload"}

        assert sign_request(a, "s") == sign_request(b, "s")

    def test_secret_is_appended_without_separator(self):
        """Should hash key=value records followed directly by the secret."""
        expected = hashlib.sha1(b"public_id=foo%20bar&timestamp=42secret").hexdigest()

        assert sign_request({"timestamp": 42, "public_id": "foo bar"}, "secret") == expected

    def test_skips_none_values(self):
        """Should treat None like an absent key."""
        with_none = {"timestamp": 42, "format": None, "public_id": "x"}

        assert sign_request(with_none, "s") == sign_request({"timestamp": 42, "public_id": "x"}, "s")

    def test_empty_params_hash_secret_only(self):
        """Should hash just the secret when nothing is signable."""
        assert sign_request({"file": "x"}, "abcd") == hashlib.sha1(b"abcd").hexdigest()

    def test_returns_lowercase_hex(self):
        """Should return a 40 character lowercase hex digest."""
        signature = sign_request({"timestamp": 1}, "abcd")

        assert len(signature) == 40
        assert signature == signature.lower()
        int(signature, 16)


class TestEscapeValue:
    """Tests for escape_value function."""

    def test_space_is_percent_encoded(self):
        """Should encode space as %20, never +."""
        assert escape_value("foo bar") == "foo%20bar"

    def test_unreserved_characters_untouched(self):
        """Should leave A-Z a-z 0-9 - . _ ~ alone."""
        assert escape_value("Az09-._~") == "Az09-._~"

    def test_reserved_characters_encoded(self):
        """Should encode commas, slashes and ampersands."""
        assert escape_value("a,b/c&d") == "a%2Cb%2Fc%26d"

    def test_non_strings_are_stringified(self):
        """Should stringify integers."""
        assert escape_value(1315060510) == "1315060510"


class TestSignableParams:
    """Tests for signable_params function."""

    def test_signature_keys_are_sorted(self):
        """Should keep the key list in lexical order."""
        assert list(SIGNATURE_KEYS) == sorted(SIGNATURE_KEYS)
        assert len(SIGNATURE_KEYS) == 8

    def test_selects_known_keys_in_order(self):
        """Should return only signature keys, ordered."""
        params = {"timestamp": 1, "file": "x", "eager": "w_10", "callback": "http://cb"}

        assert signable_params(params) == [
            ("callback", "http://cb"),
            ("eager", "w_10"),
            ("timestamp", 1),
        ]
