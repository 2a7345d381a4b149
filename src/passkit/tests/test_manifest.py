"""Tests for passkit/manifest.py."""

import hashlib
import json

import pytest

from passkit.errors import CantCalculateHashes
from passkit.manifest import create_manifest, hash_entry, serialize_manifest


class TestHashEntry:
    """Tests for hash_entry."""

    def test_lowercase_hex_sha1(self) -> None:
        digest = hash_entry(b"hello")

        assert digest == "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d"
        assert len(digest) == 40

    def test_empty_content(self) -> None:
        assert hash_entry(b"") == hashlib.sha1(b"").hexdigest()

    def test_unhashable_content_raises(self) -> None:
        with pytest.raises(CantCalculateHashes):
            hash_entry("text is not bytes")  # type: ignore[arg-type]


class TestCreateManifest:
    """Tests for create_manifest."""

    def test_one_hash_per_file(self) -> None:
        manifest = create_manifest({"icon.png": b"icon", "en.lproj/pass.strings": b"strings"})

        assert manifest == {
            "icon.png": hashlib.sha1(b"icon").hexdigest(),
            "en.lproj/pass.strings": hashlib.sha1(b"strings").hexdigest(),
        }

    def test_excludes_manifest_and_signature(self) -> None:
        """manifest.json and signature never hash themselves."""
        manifest = create_manifest({"pass.json": b"{}", "manifest.json": b"{}", "signature": b"sig"})

        assert list(manifest) == ["pass.json"]


class TestSerializeManifest:
    """Tests for serialize_manifest."""

    def test_sorted_indented_json(self) -> None:
        data = serialize_manifest({"pass.json": "b" * 40, "icon.png": "a" * 40})

        assert data == b'{\n  "icon.png": "' + b"a" * 40 + b'",\n  "pass.json": "' + b"b" * 40 + b'"\n}'
        assert json.loads(data) == {"icon.png": "a" * 40, "pass.json": "b" * 40}

    def test_identical_manifests_serialize_identically(self) -> None:
        """Insertion order does not affect the signed bytes."""
        first = serialize_manifest({"a": "1", "b": "2"})
        second = serialize_manifest({"b": "2", "a": "1"})

        assert first == second
