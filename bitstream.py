from errors import CorruptStreamError

BYTE_SIZE = 8


### BIT PACKING ###
class BitWriter:
    """Packs variable-length codes into bytes, most significant bit first."""

    def __init__(self):
        self._buf = bytearray()
        # _acc holds the bits not yet flushed; _nbits counts them (always < 8 between writes)
        self._acc = 0
        self._nbits = 0
        self.total_bits = 0

    def write(self, value, length):
        """Append the low `length` bits of `value`."""
        self._acc = (self._acc << length) | value
        self._nbits += length
        self.total_bits += length

        while self._nbits >= BYTE_SIZE:
            self._nbits -= BYTE_SIZE
            self._buf.append((self._acc >> self._nbits) & 0xFF)
        self._acc &= (1 << self._nbits) - 1

    def finish(self):
        """
        Flush the last partial byte, padded with zero bits.
        Returns (packed_bytes, padding_bits). A stream that ends on a byte
        boundary gets no extra byte and a padding count of 0.
        """
        padding_bits = 0
        if self._nbits > 0:
            padding_bits = BYTE_SIZE - self._nbits
            self._buf.append((self._acc << padding_bits) & 0xFF)
            self._acc = 0
            self._nbits = 0
        return bytes(self._buf), padding_bits


### BIT UNPACKING ###
def iter_bits(message, padding_bits):
    """Yield the data bits of `message`, dropping the padding at the end of the last byte."""
    if not 0 <= padding_bits < BYTE_SIZE:
        raise CorruptStreamError(f"Padding bit count must be 0-7, got {padding_bits}")
    if not message and padding_bits:
        raise CorruptStreamError("Padding declared for an empty message")

    last = len(message) - 1
    for i, byte_value in enumerate(message):
        # Only the last byte carries padding
        bits_to_process = BYTE_SIZE - padding_bits if i == last else BYTE_SIZE
        for j in range(bits_to_process):
            yield (byte_value >> (7 - j)) & 1
