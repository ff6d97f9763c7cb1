# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Puzzle Generator

Builds a word search grid:
1. Allocate an empty square grid
2. Place each word at a random start/direction, resampling on collision
3. Fill the remaining cells with random letters

Placement is rejection sampling, capped per word so an impossible word
raises WordPlacementError instead of looping forever.
"""

import logging
import random
import string
from typing import List, Optional, Sequence

from models import (
    DIRECTIONS, Direction, Grid, Placement, PuzzleResult
)


ALPHABET = string.ascii_uppercase
DEFAULT_ATTEMPTS_PER_CELL = 50

logger = logging.getLogger(__name__)


class PuzzleGenerationError(Exception):
    """Base class for errors raised while generating a puzzle."""
    pass


class InvalidSizeError(PuzzleGenerationError):
    """Raised when the grid size is not a positive integer."""
    pass


class InvalidWordError(PuzzleGenerationError):
    """Raised when a word is empty or contains non A-Z characters."""
    pass


class WordPlacementError(PuzzleGenerationError):
    """Raised when a word cannot be placed in the grid."""

    def __init__(self, word: str, size: int, attempts: int, reason: str = ""):
        self.word = word
        self.size = size
        self.attempts = attempts
        message = f"Cannot place word '{word}' in {size}x{size} grid"
        if reason:
            message += f": {reason}"
        else:
            message += f" after {attempts} attempts"
        super().__init__(message)


def normalize_word(word: str) -> str:
    """Uppercase a word and strip all whitespace from it."""
    return "".join(word.split()).upper()


def validate_size(size) -> int:
    """
    Check that size is a positive integer.

    Raises:
        InvalidSizeError: If size is not an int >= 1
    """
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidSizeError(f"Grid size must be an integer, got {size!r}")
    if size < 1:
        raise InvalidSizeError(f"Grid size must be positive, got {size}")
    return size


class PuzzleGenerator:
    """Generates word search puzzles by randomized placement."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        attempts_per_cell: int = DEFAULT_ATTEMPTS_PER_CELL,
        max_attempts: Optional[int] = None,
    ):
        """
        Initialize generator.

        Args:
            rng: Uniform integer source exposing randrange(n). Defaults to
                random.SystemRandom (OS entropy).
            attempts_per_cell: Per-word attempt budget, multiplied by size²
            max_attempts: Fixed per-word attempt budget, overrides
                attempts_per_cell when set
        """
        if attempts_per_cell < 1:
            raise ValueError("attempts_per_cell must be at least 1")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.rng = rng if rng is not None else random.SystemRandom()
        self.attempts_per_cell = attempts_per_cell
        self.max_attempts = max_attempts

    def attempt_limit(self, size: int) -> int:
        """Maximum candidates sampled per word for a grid of this size."""
        if self.max_attempts is not None:
            return self.max_attempts
        return self.attempts_per_cell * size * size

    def generate(self, words: Sequence[str], size: int) -> PuzzleResult:
        """
        Generate a complete puzzle.

        Args:
            words: Words to hide, placed in input order
            size: Grid dimension (size x size)

        Returns:
            PuzzleResult with the filled grid and word placements

        Raises:
            InvalidSizeError: If size is not a positive integer
            InvalidWordError: If a word is empty or not purely A-Z
            WordPlacementError: If a word does not fit
        """
        validate_size(size)
        normalized = self._prepare_words(words, size)

        grid = Grid(size=size)
        result = PuzzleResult(grid=grid)

        for word in normalized:
            if word in result.placements:
                logger.warning(f"Duplicate word '{word}' skipped")
                continue
            direction, cells, attempts = self._place_word(grid, word)
            result.placements[word] = cells
            result.directions[word] = direction
            result.attempts += attempts
            logger.debug(
                f"Placed {word} at {cells[0]} going {direction.label} "
                f"after {attempts} attempt(s)"
            )

        filled = self.fill_empty_cells(grid)

        logger.info(
            f"Generated {size}x{size} puzzle with {len(result.placements)} "
            f"word(s), {filled} filler letter(s)"
        )
        logger.debug(f"Grid:\n{grid.to_string()}")
        return result

    def _prepare_words(self, words: Sequence[str], size: int) -> List[str]:
        """Normalise words and reject any that can never fit."""
        prepared = []
        for raw in words:
            word = normalize_word(raw)
            if not word:
                raise InvalidWordError(f"Empty word in word list: {raw!r}")
            if not all(letter in ALPHABET for letter in word):
                raise InvalidWordError(
                    f"Word '{raw}' contains characters outside A-Z"
                )
            if len(word) > size:
                raise WordPlacementError(
                    word, size, 0,
                    reason=f"word has {len(word)} letters, longest run is {size}"
                )
            prepared.append(word)
        return prepared

    def _place_word(self, grid: Grid, word: str):
        """Sample candidates until one fits, then write the word into grid."""
        limit = self.attempt_limit(grid.size)
        for attempt in range(1, limit + 1):
            direction = DIRECTIONS[self.rng.randrange(len(DIRECTIONS))]
            row = self.rng.randrange(grid.size)
            col = self.rng.randrange(grid.size)
            if is_valid_position(grid, word, row, col, direction):
                cells = place_word(grid, word, row, col, direction)
                return direction, cells, attempt

        raise WordPlacementError(word, grid.size, limit)

    def fill_empty_cells(self, grid: Grid) -> int:
        """
        Fill every empty cell with a uniformly random letter.

        Returns:
            Number of cells filled
        """
        empty = grid.empty_cells()
        for row, col in empty:
            grid.set_letter(row, col, ALPHABET[self.rng.randrange(len(ALPHABET))])
        return len(empty)


def word_cells(word: str, row: int, col: int, direction: Direction) -> Placement:
    """Coordinates the letters of word would occupy, first letter first."""
    return [
        (row + i * direction.delta_row, col + i * direction.delta_col)
        for i in range(len(word))
    ]


def is_valid_position(
    grid: Grid,
    word: str,
    row: int,
    col: int,
    direction: Direction
) -> bool:
    """
    Check whether word fits at (row, col) going in direction.

    Every letter must land inside the grid on an empty cell; a single
    out-of-bounds or occupied cell rejects the whole candidate.
    """
    for r, c in word_cells(word, row, col, direction):
        if not grid.in_bounds(r, c) or not grid.is_empty(r, c):
            return False
    return True


def place_word(
    grid: Grid,
    word: str,
    row: int,
    col: int,
    direction: Direction
) -> Placement:
    """Write word into grid and return the cells it occupies."""
    cells = word_cells(word, row, col, direction)
    for letter, (r, c) in zip(word, cells):
        grid.set_letter(r, c, letter)
    return cells


def generate(
    words: Sequence[str],
    size: int,
    rng: Optional[random.Random] = None
) -> PuzzleResult:
    """Generate one puzzle with default attempt limits."""
    return PuzzleGenerator(rng=rng).generate(words, size)
