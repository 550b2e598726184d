class RatioCardError(Exception):
    """Base class for conversion failures."""


class InvalidSourceError(RatioCardError, ValueError):
    """Source has no usable pixels (zero size or undecodable)."""


class ContextUnavailableError(RatioCardError, RuntimeError):
    """A drawing canvas could not be allocated."""


class EncodingError(RatioCardError, RuntimeError):
    """Raster could not be encoded to PNG."""
