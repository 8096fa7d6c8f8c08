"""Tests for access code hashing."""

import hashlib

from galleryforge.access_codes import hash_access_code, hash_optional_code


class TestHashAccessCode:
    """Tests for hash_access_code."""

    def test_known_digest(self):
        """Test digest matches SHA-256 lowercase hex."""
        assert hash_access_code('secret') == (
            '2bb80d537b1da3e38bd30361aa855686bde0eacd7162fef6a25fe97bf527a25b'
        )

    def test_utf8_encoding(self):
        """Test non-ASCII codes are hashed as UTF-8."""
        assert hash_access_code('clé') == hashlib.sha256('clé'.encode('utf-8')).hexdigest()

    def test_fixed_length(self):
        """Test digest length does not depend on input."""
        assert len(hash_access_code('a')) == 64
        assert len(hash_access_code('a' * 1000)) == 64

    def test_no_trimming(self):
        """Test whitespace is significant, as in the viewer."""
        assert hash_access_code('secret ') != hash_access_code('secret')


class TestHashOptionalCode:
    """Tests for hash_optional_code."""

    def test_none(self):
        """Test missing code gives no hash."""
        assert hash_optional_code(None) is None

    def test_empty(self):
        """Test empty code counts as missing."""
        assert hash_optional_code('') is None

    def test_present(self):
        """Test present code is hashed."""
        assert hash_optional_code('secret') == hash_access_code('secret')
