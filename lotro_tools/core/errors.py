"""Exceptions and warnings raised by the LOTRO Tools core."""


class LotroToolsError(Exception):
    """Base class for all LOTRO Tools errors."""


class LoadError(LotroToolsError):
    """The stats table could not be read, or it contained no usable rows."""

    def __init__(self, source, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load stats table from {source!r}: {reason}")


class ParseWarning(UserWarning):
    """A row of the stats table was malformed and has been skipped."""
