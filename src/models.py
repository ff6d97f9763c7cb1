"""
Data models for the word search generator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Tuple


EMPTY_CELL = ""

Position = Tuple[int, int]
Placement = List[Position]


class Direction(Enum):
    """Directions a word may run through the grid, as (row delta, col delta)."""
    RIGHT = (0, 1)
    DOWN = (1, 0)
    DOWN_RIGHT = (1, 1)
    UP_RIGHT = (-1, 1)

    @property
    def delta_row(self) -> int:
        return self.value[0]

    @property
    def delta_col(self) -> int:
        return self.value[1]

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


# Sampling order for the direction index
DIRECTIONS: List[Direction] = list(Direction)


@dataclass
class Grid:
    """Square letter grid. Cells hold EMPTY_CELL or a single uppercase letter."""
    size: int
    cells: List[List[str]] = field(default_factory=list)

    def __post_init__(self):
        if not self.cells:
            self.cells = [
                [EMPTY_CELL for _ in range(self.size)]
                for _ in range(self.size)
            ]

    def get(self, row: int, col: int) -> str:
        """Get the letter at position."""
        return self.cells[row][col]

    def set_letter(self, row: int, col: int, letter: str):
        """Set a letter in a cell."""
        self.cells[row][col] = letter.upper()

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row][col] == EMPTY_CELL

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= row < self.size and 0 <= col < self.size

    def empty_cells(self) -> List[Position]:
        """All positions still holding EMPTY_CELL, row-major."""
        return [
            (row, col)
            for row in range(self.size)
            for col in range(self.size)
            if self.is_empty(row, col)
        ]

    def rows(self) -> List[List[str]]:
        """Copy of the cells as a list of rows."""
        return [list(row) for row in self.cells]

    def to_string(self) -> str:
        """Convert grid to string representation."""
        result = []
        for row in self.cells:
            result.append(" ".join(letter or "_" for letter in row))
        return "\n".join(result)


@dataclass
class PuzzleResult:
    """Finished grid plus where each word was placed."""
    grid: Grid
    placements: Dict[str, Placement] = field(default_factory=dict)
    directions: Dict[str, Direction] = field(default_factory=dict)
    attempts: int = 0

    @property
    def size(self) -> int:
        return self.grid.size


@dataclass
class PuzzleSpec:
    """
    One puzzle described by a batch file.

    size is None when the gridSize marker had no integer; size_text then
    holds what the marker said.
    """
    index: int
    size: Optional[int]
    words: List[str] = field(default_factory=list)
    line_number: Optional[int] = None
    size_text: Optional[str] = None

    @property
    def label(self) -> str:
        if self.size is None:
            return f"gridSize {self.size_text!r}"
        return f"{self.size}x{self.size}"
