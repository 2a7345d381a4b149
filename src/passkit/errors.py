"""Errors raised while packaging a pass.

Every failure of the packaging pipeline is a ``PassCreateError``. The set of
subclasses is closed; none of them is retryable, the first one raised aborts
the build and no archive bytes are returned.
"""


class PassCreateError(Exception):
    """Base class for all packaging failures."""

    message = "Can't create pass"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.detail:
            return f"PassCreateError: {self.message}: {self.detail}"
        return f"PassCreateError: {self.message}"


class CantReadTempDir(PassCreateError):
    message = "Can't read source directory"


class CantReadEntry(PassCreateError):
    message = "Can't read entry"


class CantParsePassFile(PassCreateError):
    message = "pass.json invalid"


class PassContentNotFound(PassCreateError):
    message = "Please, provide pass.json or an instance of Pass"


class CantCreateTempDir(PassCreateError):
    message = "Can't create temporary file. Check rights"


class CantCopySourceToTemp(PassCreateError):
    message = "Can't copy source files"


class CantSerializePass(PassCreateError):
    message = "Can't serialize pass.json"


class CantWritePassFile(PassCreateError):
    message = "Can't write pass.json"


class CantCalculateHashes(PassCreateError):
    message = "Can't calculate hashes"


class CantCreateManifestFile(PassCreateError):
    message = "Can't create manifest file"


class CantSignManifest(PassCreateError):
    message = "Can't sign manifest"
