"""Description metadata errors."""


class MetadataError(Exception):
    """Base exception for sidecar metadata operations."""


class MetadataWriteError(MetadataError):
    """Raised when a sidecar file cannot be written."""
