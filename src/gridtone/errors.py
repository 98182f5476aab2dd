"""Exception types raised by gridtone."""


class GridtoneError(Exception):
    """Base class for all gridtone errors."""


class EmptyBitmapError(GridtoneError, ValueError):
    """Raised when a bitmap with zero area is handed to the sampler."""


class ImportFailure(GridtoneError):
    """Raised when a source image cannot be decoded."""


class ExportError(GridtoneError):
    """Raised when the composite cannot be encoded."""
