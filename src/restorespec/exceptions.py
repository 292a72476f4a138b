"""restorespec exception hierarchy.

All public exceptions inherit from RestoreSpecError, giving callers a single
base class to catch when they want to handle any restorespec failure without
swallowing unrelated errors.
"""


class RestoreSpecError(Exception):
    """Base exception for all restorespec errors."""


class ConfigurationError(RestoreSpecError):
    """Raised when a mandatory project property is missing or invalid.

    The canonical case is a project without an output (extensions) path:
    no assets file, cache file or restore output location can be derived,
    so building a specification cannot continue.
    """


class ManifestError(ConfigurationError):
    """Raised when a project manifest or settings file cannot be read."""


class ParseError(RestoreSpecError):
    """Raised when a framework moniker, version or version range is malformed.

    Parse errors are never downgraded: emitting an incomplete specification
    is worse than failing the restore.
    """


class RecoverableIOError(RestoreSpecError):
    """Raised for I/O failures that callers may degrade gracefully from."""


class LockArtifactError(RecoverableIOError):
    """Raised when the lock artifact (assets file) is unreadable or corrupt.

    The lock artifact cache catches this, logs it, and serves empty
    transitive data for the query instead of aborting it.
    """
