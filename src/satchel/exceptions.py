"""Custom exceptions for satchel."""


class SatchelError(Exception):
    """Base exception for all satchel errors."""

    pass


class ManifestError(SatchelError):
    """Base exception for manifest loading problems."""

    pass


class ManifestNotFoundError(ManifestError):
    """Raised when the input manifest file does not exist."""

    pass


class ManifestParseError(ManifestError):
    """Raised when the manifest cannot be parsed."""

    pass


class ManifestValidationError(ManifestError):
    """Raised when strict validation rejects a manifest entry."""

    pass


class DaemonError(SatchelError):
    """Base exception for container daemon operations."""

    pass


class DaemonConnectionError(DaemonError):
    """Raised when unable to connect to the container daemon."""

    pass


class PullError(DaemonError):
    """Raised when an image pull fails."""

    pass


class TagError(DaemonError):
    """Raised when an image cannot be tagged."""

    pass


class ListError(DaemonError):
    """Raised when the daemon image list cannot be fetched."""

    pass


class SaveError(DaemonError):
    """Raised when the daemon cannot export images."""

    pass


class ArchiveError(SatchelError):
    """Base exception for archive writing errors."""

    pass


class FileCreateError(ArchiveError):
    """Raised when the output archive cannot be created."""

    pass


class CompressionError(ArchiveError):
    """Raised when compressing the image stream fails."""

    pass


class ArchiveWriteError(ArchiveError):
    """Raised when compressed data cannot be written to disk."""

    pass


class ScriptError(SatchelError):
    """Base exception for load script generation."""

    pass


class TemplateRenderError(ScriptError):
    """Raised when the load script template cannot be rendered."""

    pass


class ScriptWriteError(ScriptError):
    """Raised when the load script cannot be written."""

    pass
