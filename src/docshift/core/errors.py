"""Conversion error types"""


class ConversionError(RuntimeError):
    """A conversion failed while reading, rendering or serializing."""

    def __init__(self, source: str, target: str, cause: Exception):
        self.source = source
        self.target = target
        self.cause = cause
        super().__init__(f"Failed to convert {source} to {target}: {cause}")


class UnsupportedConversionError(ValueError):
    """No converter exists for the requested extension pair."""

    def __init__(self, source_ext: str, target_ext: str):
        self.source_ext = source_ext
        self.target_ext = target_ext
        super().__init__(f"Conversion from .{source_ext} to .{target_ext} is not supported")
