"""
QR matrix module.

Builds the Version 1 module grid, draws its function patterns and answers
placement queries for the data placer.
"""

import logging
from enum import Enum

log = logging.getLogger("qrv1.matrix")

VERSION = 1

VERSION_PARAMETERS = {
    # Version 1 has maximum size: 21x21
    1: {"size": 21, "data_codewords": 19},
}

SIZE = 4 * VERSION + 17

FINDER_SIZE = 7

FINDER_ORIGINS = [(0, 0), (0, SIZE - FINDER_SIZE), (SIZE - FINDER_SIZE, 0)]

# Row of the horizontal and column of the vertical timing line.
TIMING_INDEX = 6

# Timing lines run between the separators.
TIMING_RANGE = range(FINDER_SIZE + 1, SIZE - FINDER_SIZE - 1)

DARK_MODULE = (4 * VERSION + 9, 8)


class Module(Enum):
    """
    State of a single cell: its colour and whether a function pattern owns it.
    """
    LIGHT = (False, False)
    DARK = (True, False)
    LIGHT_RESERVED = (False, True)
    DARK_RESERVED = (True, True)

    @property
    def is_dark(self) -> bool:
        return self.value[0]

    @property
    def is_reserved(self) -> bool:
        return self.value[1]

    @classmethod
    def of(cls, dark, reserved=False):
        """
        Look up the member for a colour and reservation flag.

        @param dark: True for a dark (black) module
        @param reserved: True for a function module
        @return: Matching Module member
        """
        return cls((bool(dark), bool(reserved)))


def finder_value(dr: int, dc: int) -> bool:
    """
    Colour of a finder pattern cell relative to the pattern's top-left corner.

    Outer ring dark, one light ring, then a 3x3 dark core.
    """
    ring = min(dr, dc, FINDER_SIZE - 1 - dr, FINDER_SIZE - 1 - dc)
    return ring != 1


def separator_coords(size: int = SIZE) -> list[tuple[int, int]]:
    """
    List the light border cells that isolate each finder from the data area.

    Each separator is an L of 15 cells hugging the inner sides of a finder.

    @param size: Dimension of the matrix
    @return: Separator coordinates as (row, col) pairs, without duplicates
    """
    last = size - 1
    edge = FINDER_SIZE
    coords = [
        *((i, edge) for i in range(edge + 1)), *((edge, i) for i in range(edge)),
        *((i, last - edge) for i in range(edge + 1)), *((edge, last - i) for i in range(edge)),
        *((last - edge, i) for i in range(edge + 1)), *((last - i, edge) for i in range(edge)),
    ]
    return coords


class QRMatrix:
    """
    The 21x21 module grid of a Version 1 symbol.

    Construction draws the finder patterns, separators, timing patterns and
    the dark module, reserving every cell it touches. Payload bits are then
    written with update().

    Row and column arguments must satisfy 0 <= index < SIZE; anything else
    raises IndexError.
    """

    def __init__(self):
        self.size = SIZE
        self._cells = [[Module.LIGHT] * self.size for _ in range(self.size)]
        self._draw_finder_patterns()
        self._draw_separators()
        self._draw_timing_patterns()
        self._draw_dark_module()
        log.debug("Built version %d matrix with %d function modules",
                  VERSION, self.function_module_count())

    def _set_function(self, row: int, col: int, dark: bool):
        self._cells[row][col] = Module.of(dark, reserved=True)

    def _draw_finder_patterns(self):
        for r, c in FINDER_ORIGINS:
            for dr in range(FINDER_SIZE):
                for dc in range(FINDER_SIZE):
                    self._set_function(r + dr, c + dc, finder_value(dr, dc))

    def _draw_separators(self):
        for r, c in separator_coords(self.size):
            self._set_function(r, c, False)

    def _draw_timing_patterns(self):
        for i in TIMING_RANGE:
            self._set_function(TIMING_INDEX, i, i % 2 == 0)
            self._set_function(i, TIMING_INDEX, i % 2 == 0)

    def _draw_dark_module(self):
        self._set_function(*DARK_MODULE, True)

    def _check_bounds(self, row: int, col: int):
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"module ({row}, {col}) outside {self.size}x{self.size} matrix")

    def update(self, row: int, col: int, value):
        """
        Write a module colour without consulting the reservation.

        The placer must never call this on a function module; doing so
        changes the colour but the cell stays reserved.

        @param row: Row index
        @param col: Column index
        @param value: Truthy for dark, falsy for light
        """
        self._check_bounds(row, col)
        self._cells[row][col] = Module.of(value, self._cells[row][col].is_reserved)

    def get_module(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return self._cells[row][col].is_dark

    def is_function_module(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return self._cells[row][col].is_reserved

    def cell(self, row: int, col: int) -> Module:
        self._check_bounds(row, col)
        return self._cells[row][col]

    def function_module_count(self) -> int:
        return sum(cell.is_reserved for row in self._cells for cell in row)

    def free_module_count(self) -> int:
        return self.size * self.size - self.function_module_count()

    def copy(self) -> "QRMatrix":
        """Return an independent matrix with the same cell states."""
        other = QRMatrix.__new__(QRMatrix)
        other.size = self.size
        other._cells = [row[:] for row in self._cells]
        return other

    def to_rows(self) -> list[list[bool]]:
        """Colours as a list of rows, True for dark."""
        return [[cell.is_dark for cell in row] for row in self._cells]

    def to_string(self) -> str:
        """
        Debug dump: one line per row, 'X' for dark and '.' for light.
        """
        return "".join(
            "".join("X" if cell.is_dark else "." for cell in row) + "\n"
            for row in self._cells
        )

    def __str__(self):
        return self.to_string()

    def __eq__(self, other):
        if not isinstance(other, QRMatrix):
            return NotImplemented
        return self._cells == other._cells
