"""
Data placement module.

Maps an ordered bit sequence onto the free modules of a QRMatrix using the
zig-zag walk that starts in the bottom-right corner.
"""

import logging
from enum import Enum

from qr_matrix import SIZE, TIMING_INDEX

log = logging.getLogger("qrv1.placer")


class Direction(Enum):
    """Vertical direction of the current lane, valued as the row step."""
    UP = -1
    DOWN = 1

    def flipped(self) -> "Direction":
        return Direction.DOWN if self is Direction.UP else Direction.UP


def is_right_column(col: int) -> bool:
    """
    True if col is the right-hand column of its two-column lane.

    Lanes pair (20, 19), (18, 17) ... (8, 7) right of the timing column
    and (5, 4), (3, 2), (1, 0) left of it.
    """
    if col > TIMING_INDEX:
        return col % 2 == 0
    return col % 2 == 1


def walk_positions(size: int = SIZE):
    """
    Yield every (row, col) the placement cursor visits, in order.

    Function modules are yielded too; the caller decides whether to write.
    Column 6 is never visited.

    @param size: Dimension of the matrix
    """
    row, col = size - 1, size - 1
    direction = Direction.UP
    while col >= 0:
        if col == TIMING_INDEX:
            col -= 1
        yield row, col
        if is_right_column(col):
            col -= 1
            continue
        col += 1
        row += direction.value
        if not 0 <= row < size:
            # Bounce off the edge into the next lane
            row -= direction.value
            col -= 2
            direction = direction.flipped()


_END = object()


def place_data(matrix, data_bits) -> int:
    """
    Write data bits into the matrix's free modules in zig-zag order.

    Function modules are passed over. Placement stops once the bits run
    out, leaving later free modules light, or once the walk leaves the
    grid, dropping any bits that did not fit.

    @param matrix: QRMatrix to fill
    @param data_bits: Iterable of truthy (dark) / falsy (light) values, possibly endless
    @return: Number of bits written
    """
    bits = iter(data_bits)
    bit_index = 0
    for row, col in walk_positions(matrix.size):
        if matrix.is_function_module(row, col):
            continue
        bit = next(bits, _END)
        if bit is _END:
            break
        matrix.update(row, col, bit)
        bit_index += 1
    else:
        if next(bits, _END) is not _END:
            if hasattr(data_bits, '__len__'):
                log.warning("Matrix full: dropped %d of %d data bits",
                            len(data_bits) - bit_index, len(data_bits))
            else:
                log.warning("Matrix full: dropped data bits after the first %d", bit_index)
    log.debug("Placed %d data bits", bit_index)
    return bit_index
