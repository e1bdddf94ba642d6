"""Exceptions raised by mmrtool."""


class MmrError(Exception):
    """Base class for every error mmrtool raises."""


class BodyDecodeError(MmrError, ValueError):
    """A TLV body could not be decoded (unknown tag or wrong length)."""


class ParseError(MmrError, ValueError):
    """Raw bytes do not hold a well-formed MMR."""


class RenderError(MmrError):
    """A projection tree could not be serialized."""


class AreaError(MmrError):
    """A flash area could not be located or mounted."""
