"""Exceptions raised by the Huffman codec."""


class HuffmanError(Exception):
    """Base class for every error raised while encoding or decoding."""


class EmptyInputError(HuffmanError, ValueError):
    """There are no symbols to encode (empty text, or everything was filtered out)."""


class UnknownSymbolError(HuffmanError, LookupError):
    """A symbol in the text has no entry in the code table."""

    def __init__(self, symbol):
        super().__init__(f"No Huffman code for symbol {symbol!r}")
        self.symbol = symbol


class FormatError(HuffmanError, ValueError):
    """A serialized tree or stored result is malformed."""


class CorruptStreamError(HuffmanError, ValueError):
    """The packed bit stream does not decode cleanly against its tree."""
