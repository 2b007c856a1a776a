class CodecError(Exception):
    """Base class for every failure raised by the compressor."""


class IOUnavailable(CodecError):
    """Source could not be read or destination could not be written."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class MalformedHeader(CodecError):
    """Header is shorter than or inconsistent with its declared entry count."""


class TruncatedStream(CodecError):
    """Packed data ran out before every symbol was decoded."""


class CorruptStream(CodecError):
    """Packed data walked off the tree."""


class InputTooLarge(CodecError):
    """A byte value occurs more often than the header's frequency field can hold."""
