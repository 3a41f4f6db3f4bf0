from __future__ import annotations

from hybridcrypt.errors import MalformedPadding, PayloadTooLarge
from hybridcrypt.modmath import check_modulus

# Block layout, most significant bit first, block_bits wide:
#
#   [1 marker][1...1 pad][0 separator][payload, 8*L bits]
#
# The pad length follows from block_bits and L, so encoding is deterministic.
# block_bits = bitlen(n) - 1 keeps every block strictly below n.


def block_bits_for(n: int) -> int:
    check_modulus(n)
    return n.bit_length() - 1


def chunk_capacity(block_bits: int) -> int:
    """
    Payload bytes carried by one block.

    Marker plus pad cover at least half of the block, so a block that was
    never produced by encode() is rejected with overwhelming probability.
    Moduli too small for that carry whatever still leaves marker and separator.
    """
    if block_bits < 2:
        return 0
    cap = ((block_bits - 1) // 2) // 8
    return cap or (block_bits - 2) // 8


def encode(payload: bytes, block_bits: int) -> int:
    if block_bits < 2:
        raise PayloadTooLarge("modulus too small for padding")
    cap = chunk_capacity(block_bits)
    if len(payload) > cap:
        raise PayloadTooLarge(f"payload of {len(payload)} bytes exceeds block capacity {cap}")

    payload_bits = 8 * len(payload)
    ones = block_bits - payload_bits - 1
    pad = (1 << ones) - 1
    return (pad << (payload_bits + 1)) | int.from_bytes(payload, "big")


def decode(block: int, block_bits: int) -> bytes:
    if block_bits < 2 or block < 0 or block >= (1 << block_bits):
        raise MalformedPadding("block out of range")

    top = block_bits - 1
    if not (block >> top) & 1:
        raise MalformedPadding("missing marker bit")

    pos = top - 1
    while pos >= 0 and (block >> pos) & 1:
        pos -= 1
    if pos < 0:
        raise MalformedPadding("missing separator")

    if pos % 8 or pos // 8 > chunk_capacity(block_bits):
        raise MalformedPadding("bad payload length")

    return (block & ((1 << pos) - 1)).to_bytes(pos // 8, "big")
