"""manifest.json: SHA-1 hashes of every file in the pass package."""

import hashlib
import json
from collections.abc import Mapping

from passkit.errors import CantCalculateHashes, CantCreateManifestFile

MANIFEST_FILENAME = "manifest.json"
SIGNATURE_FILENAME = "signature"

Manifest = dict[str, str]


def hash_entry(content: bytes) -> str:
    """Lowercase hex SHA-1 digest of an archive entry.

    Raises:
        CantCalculateHashes: If the content cannot be hashed.
    """
    try:
        return hashlib.sha1(content).hexdigest()
    except (TypeError, ValueError) as e:
        raise CantCalculateHashes(str(e)) from e


def create_manifest(files: Mapping[str, bytes]) -> Manifest:
    """Map each file name to the hash of its content.

    manifest.json and signature are never part of their own manifest.
    """
    return {
        filename: hash_entry(content)
        for filename, content in files.items()
        if filename not in (MANIFEST_FILENAME, SIGNATURE_FILENAME)
    }


def serialize_manifest(manifest: Manifest) -> bytes:
    """Serialize a manifest to the manifest.json bytes.

    Keys are sorted so identical manifests always produce identical bytes,
    which keeps the signed content stable across runs.

    Raises:
        CantCreateManifestFile: If the manifest cannot be serialized.
    """
    try:
        return json.dumps(manifest, indent=2, sort_keys=True).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise CantCreateManifestFile(str(e)) from e
