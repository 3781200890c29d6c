# -*- coding: utf-8 -*-
"""
QR Code Mask Patterns Module

The eight data mask patterns of ISO/IEC 18004. A mask inverts every
non-function module whose (x, y) position satisfies the pattern condition,
where x is the column and y the row.

Functions:
    mask_condition: Evaluate a mask pattern at a position
    apply_mask: XOR a mask pattern over the data modules of a grid
"""

from typing import Callable, List

MASK_PATTERNS: List[Callable[[int, int], bool]] = [
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: (x // 3 + y // 2) % 2 == 0,
    lambda x, y: x * y % 2 + x * y % 3 == 0,
    lambda x, y: (x * y % 2 + x * y % 3) % 2 == 0,
    lambda x, y: ((x + y) % 2 + x * y % 3) % 2 == 0,
]


def mask_condition(mask: int, x: int, y: int) -> bool:
    """Return True if the given mask inverts the module at (x, y)."""
    if mask < 0 or mask > 7:
        raise ValueError("Mask value out of range")
    return MASK_PATTERNS[mask](x, y)


def apply_mask(modules: List[List[bool]], is_function: List[List[bool]], mask: int) -> None:
    """
    XOR the mask pattern over every non-function module, in place.

    Applying the same mask twice restores the original grid, which is what
    lets the automatic mask selection try a mask, score it and undo it.

    Args:
        modules (List[List[bool]]): Module colors, modified in place
        is_function (List[List[bool]]): Function module markers
        mask (int): Mask pattern 0-7

    Raises:
        ValueError: If the mask is out of range
    """
    if mask < 0 or mask > 7:
        raise ValueError("Mask value out of range")
    condition = MASK_PATTERNS[mask]
    for y, (row, function_row) in enumerate(zip(modules, is_function)):
        for x in range(len(row)):
            if not function_row[x] and condition(x, y):
                row[x] = not row[x]
