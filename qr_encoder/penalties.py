# -*- coding: utf-8 -*-
"""
QR Code Mask Penalty Evaluation Module

This module implements the mask pattern evaluation algorithm according to
ISO/IEC 18004 standard. A masked symbol is scored on four criteria (N1-N4)
and the mask with the lowest total penalty is considered optimal.

Functions:
    penalty_N1: Evaluate adjacent modules in runs (Rule N1)
    penalty_N2: Evaluate 2x2 blocks of same color (Rule N2)
    penalty_N3: Evaluate finder-like patterns (Rule N3)
    penalty_N4: Evaluate dark/light module ratio (Rule N4)
    compute_mask_penalty: Calculate total penalty score
"""

from typing import List, Sequence

PENALTY_N1 = 3
PENALTY_N2 = 3
PENALTY_N3 = 40
PENALTY_N4 = 10

# 1:1:3:1:1 finder-like run with four light modules on one side
_FINDER_LIKE = (0b10111010000, 0b00001011101)


def _columns(rows: List[List[bool]]) -> List[List[bool]]:
    return [list(col) for col in zip(*rows)]


def _run_penalty(lines: List[List[bool]]) -> int:
    score = 0
    for line in lines:
        run = 1
        for i in range(1, len(line)):
            if line[i] == line[i - 1]:
                run += 1
            else:
                if run >= 5:
                    score += PENALTY_N1 + (run - 5)
                run = 1
        if run >= 5:
            score += PENALTY_N1 + (run - 5)
    return score


def penalty_N1(rows: List[List[bool]]) -> int:
    """
    Calculate penalty for adjacent modules in runs (Rule N1).

    This rule penalizes long runs of consecutive modules of the same color
    in both horizontal and vertical directions. Runs of 5 or more modules
    receive penalties: 3 + (run_length - 5).

    Args:
        rows (List[List[bool]]): QR matrix (True=dark, False=light)

    Returns:
        int: Penalty score for rule N1

    Example:
        >>> penalty_N1([[True, True, True, True, True, False]])
        3
    """
    return _run_penalty(rows) + _run_penalty(_columns(rows))


def penalty_N2(rows: List[List[bool]]) -> int:
    """
    Calculate penalty for 2x2 blocks of same color (Rule N2).

    Every 2x2 block whose four modules share a color adds 3 points;
    overlapping blocks are all counted.
    """
    score = 0
    for r in range(len(rows) - 1):
        upper, lower = rows[r], rows[r + 1]
        for c in range(len(upper) - 1):
            value = upper[c]
            if upper[c + 1] == value and lower[c] == value and lower[c + 1] == value:
                score += PENALTY_N2
    return score


def _finder_like_count(line: Sequence[bool]) -> int:
    count = 0
    bits = 0
    for i, dark in enumerate(line):
        bits = ((bits << 1) & 0x7FF) | (1 if dark else 0)
        if i >= 10 and bits in _FINDER_LIKE:
            count += 1
    return count


def penalty_N3(rows: List[List[bool]]) -> int:
    """
    Calculate penalty for finder-like patterns (Rule N3).

    Every 11-module window, in rows and independently in columns, that
    reads 10111010000 or 00001011101 adds 40 points.

    Args:
        rows (List[List[bool]]): QR matrix (True=dark, False=light)

    Returns:
        int: Penalty score for rule N3

    Example:
        >>> penalty_N3([[True, False, True, True, True, False, True, False, False, False, False]])
        40
    """
    windows = sum(_finder_like_count(row) for row in rows)
    windows += sum(_finder_like_count(col) for col in zip(*rows))
    return PENALTY_N3 * windows


def penalty_N4(rows: List[List[bool]]) -> int:
    """
    Calculate penalty for dark/light module ratio (Rule N4).

    Finds the smallest k >= 0 such that the percentage of dark modules lies
    within [45 - 5k, 55 + 5k] and returns 10 * k. Integer arithmetic keeps
    the boundaries exact: 45% and 55% themselves cost nothing.

    Example:
        >>> penalty_N4([[True, True, True, False]])  # 75% dark
        40
    """
    total = sum(len(row) for row in rows)
    dark = sum(1 for row in rows for v in row if v)
    k = 0
    while dark * 20 < (9 - k) * total or dark * 20 > (11 + k) * total:
        k += 1
    return PENALTY_N4 * k


def compute_mask_penalty(matrix_bool: Sequence[Sequence[bool]]) -> int:
    """
    Calculate total mask penalty score for a QR code matrix.

    This function combines all four penalty rules (N1-N4) to determine
    the overall quality score of a QR code with a specific mask pattern.
    Lower scores indicate a symbol that is easier to scan.

    Args:
        matrix_bool (Sequence[Sequence[bool]]): QR matrix (True=dark, False=light)

    Returns:
        int: Total penalty score (lower is better)
    """
    rows = [[bool(v) for v in row] for row in matrix_bool]
    return penalty_N1(rows) + penalty_N2(rows) + penalty_N3(rows) + penalty_N4(rows)
