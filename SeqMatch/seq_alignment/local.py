"""
Local Alignment Module
Smith-Waterman style alignment under a PenaltyMatrix, with a
backtrace table for reconstructing the aligned fragments
"""

import numpy as np
from typing import Tuple, List, Optional, Literal, Union
from dataclasses import dataclass

from .penalty import PenaltyMatrix, GAP_SYMBOL

# Backtrace codes
NONE = 0
UP = 1
LEFT = 2
DIAG = 3

ScanMode = Literal["last_row", "full"]


@dataclass(frozen=True)
class AlignmentResult:
    """Store local alignment results and metadata"""
    seq1_aligned: str
    seq2_aligned: str
    score: int
    start1: int
    end1: int
    start2: int
    end2: int
    match_string: str
    identity: float
    gaps: int
    seq1_original: str
    seq2_original: str
    gap_symbol: str = GAP_SYMBOL

    def __str__(self) -> str:
        """String representation of alignment"""
        return (
            f"Alignment Score: {self.score}\n"
            f"Identity: {self.identity:.2%}\n"
            f"Gaps: {self.gaps}\n"
            f"Range: [{self.start1}-{self.end1}] x [{self.start2}-{self.end2}]\n"
        )

    def __len__(self) -> int:
        return len(self.seq1_aligned)

    def format(self, width: int = 80) -> str:
        """Alignment block text with match indicators"""
        lines = [
            "",
            f"Sequence 1: {self.seq1_original}",
            f"Sequence 2: {self.seq2_original}",
            "",
            f"Identity: {self.identity:.2%}",
            f"Gaps: {self.gaps}",
            "",
            f"Score: {self.score}",
            "",
        ]

        for start in range(0, len(self.seq1_aligned), width):
            end = min(start + width, len(self.seq1_aligned))
            lines.append(f"pattern: {self.seq1_aligned[start:end]}")
            lines.append(f"         {self.match_string[start:end]}")
            lines.append(f"subject: {self.seq2_aligned[start:end]}")
            lines.append("")

        return "\n".join(lines)

    def plot(self, width: int = 80) -> None:
        """Display alignment with match indicators"""
        print(self.format(width))

    def view(self, width: int = 80) -> None:
        """Alias for plot method"""
        self.plot(width)

    def nmatch(self) -> int:
        """Number of matching positions"""
        return sum(1 for a, b in zip(self.seq1_aligned, self.seq2_aligned)
                   if a == b and a != self.gap_symbol)


def traceback(
    seq1: str,
    seq2: str,
    backtrace: np.ndarray,
    start: Tuple[int, int],
    gap_symbol: str = GAP_SYMBOL
) -> Tuple[str, str, int, int]:
    """
    Follow backtrace codes from `start` until a NONE cell.

    Returns:
    --------
    (aligned1, aligned2, i, j)
        The aligned fragments and the cell where the walk stopped, so the
        fragments cover seq1[i:start[0]] and seq2[j:start[1]].
    """
    aligned1: List[str] = []
    aligned2: List[str] = []
    i, j = start

    while True:
        move = backtrace[i, j]
        if move == UP:
            aligned1.append(seq1[i - 1])
            aligned2.append(gap_symbol)
            i -= 1
        elif move == LEFT:
            aligned1.append(gap_symbol)
            aligned2.append(seq2[j - 1])
            j -= 1
        elif move == DIAG:
            aligned1.append(seq1[i - 1])
            aligned2.append(seq2[j - 1])
            i -= 1
            j -= 1
        else:
            break

    return ''.join(reversed(aligned1)), ''.join(reversed(aligned2)), i, j


class LocalAligner:
    """
    Local alignment of two sequences under a PenaltyMatrix

    Parameters:
    -----------
    matrix : PenaltyMatrix
        Pair scores; residue vs gap_symbol gives the gap cost
    scan : str
        Where to look for the best-scoring cell:
        "last_row" (default) only scans the bottom row (i = len(seq1)),
        "full" takes the maximum over the whole table
    gap_symbol : str
        Gap character used for matrix lookups and in aligned strings
    """

    def __init__(
        self,
        matrix: PenaltyMatrix,
        scan: ScanMode = "last_row",
        gap_symbol: str = GAP_SYMBOL
    ):
        if scan not in ("last_row", "full"):
            raise ValueError("scan must be 'last_row' or 'full'")
        self.matrix = matrix
        self.scan = scan
        self.gap_symbol = gap_symbol

    def _initialize_matrix(self, len1: int, len2: int) -> Tuple[np.ndarray, np.ndarray]:
        """Zero score table and all-NONE backtrace table"""
        score_matrix = np.zeros((len1 + 1, len2 + 1), dtype=np.int64)
        backtrace = np.full((len1 + 1, len2 + 1), NONE, dtype=np.int8)
        return score_matrix, backtrace

    def _fill_matrix(
        self,
        seq1: str,
        seq2: str,
        score_matrix: np.ndarray,
        backtrace: np.ndarray,
        verbose: bool = False
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Fill the score and backtrace tables"""
        len1, len2 = len(seq1), len(seq2)
        penalty = self.matrix.get_penalty
        gap = self.gap_symbol

        if verbose:
            print(f"\nFilling alignment matrix for sequences of length {len1} x {len2}")
            print(f"Total cells to compute: {len1 * len2}")
            print("Computing ", end="")

        for i in range(1, len1 + 1):
            a = seq1[i - 1]
            up_penalty = penalty(a, gap)
            for j in range(1, len2 + 1):
                b = seq2[j - 1]
                up = score_matrix[i - 1, j] + up_penalty
                left = score_matrix[i, j - 1] + penalty(gap, b)
                diag = score_matrix[i - 1, j - 1] + penalty(a, b)
                best = max(up, left, diag, 0)
                score_matrix[i, j] = best

                # Zero cells start a new alignment; otherwise prefer
                # left, then diagonal, then up
                if best == 0:
                    backtrace[i, j] = NONE
                elif left == best:
                    backtrace[i, j] = LEFT
                elif diag == best:
                    backtrace[i, j] = DIAG
                else:
                    backtrace[i, j] = UP

            if verbose and i % max(1, len1 // 10) == 0:
                print("█", end="", flush=True)

        if verbose:
            print(" 100.0%")
            print("✓ Matrix computation complete!")

        return score_matrix, backtrace

    def _find_best_cell(self, score_matrix: np.ndarray) -> Tuple[int, Tuple[int, int]]:
        """Best score and its cell, according to the scan mode"""
        len1 = score_matrix.shape[0] - 1

        if self.scan == "full":
            flat = int(np.argmax(score_matrix))
            i, j = np.unravel_index(flat, score_matrix.shape)
            return int(score_matrix[i, j]), (int(i), int(j))

        # Bottom row only; first strictly greater cell wins
        best_score = 0
        best_j = 0
        for j in range(1, score_matrix.shape[1]):
            if score_matrix[len1, j] > best_score:
                best_score = int(score_matrix[len1, j])
                best_j = j
        return best_score, (len1, best_j)

    def _calculate_match_string(self, aligned1: str, aligned2: str) -> str:
        """Generate match string"""
        match_str = []
        for a, b in zip(aligned1, aligned2):
            if a == self.gap_symbol or b == self.gap_symbol:
                match_str.append(' ')
            elif a == b:
                match_str.append('|')
            else:
                match_str.append('.')
        return ''.join(match_str)

    def score_matrix(self, seq1: str, seq2: str) -> Tuple[np.ndarray, np.ndarray]:
        """Filled (score, backtrace) tables for inspection"""
        D, B = self._initialize_matrix(len(seq1), len(seq2))
        return self._fill_matrix(seq1, seq2, D, B)

    def align(
        self,
        seq1: str,
        seq2: str,
        score_only: bool = False,
        verbose: bool = False
    ) -> Union[AlignmentResult, int]:
        """
        Perform local alignment

        Parameters:
        -----------
        seq1 : str
            First sequence (pattern); the "last_row" scan runs along its end
        seq2 : str
            Second sequence (subject)
        score_only : bool
            If True, return only the alignment score
        verbose : bool
            If True, display progress during alignment

        Returns:
        --------
        AlignmentResult or int
        """
        if verbose:
            print("\n" + "=" * 70)
            print("LOCAL SEQUENCE ALIGNMENT")
            print("=" * 70)
            print(f"Sequence 1: {seq1}")
            print(f"Sequence 2: {seq2}")
            print(f"Best-cell scan: {self.scan}")
            print("=" * 70)

        score_matrix, backtrace = self._initialize_matrix(len(seq1), len(seq2))
        score_matrix, backtrace = self._fill_matrix(
            seq1, seq2, score_matrix, backtrace, verbose
        )
        best_score, best_pos = self._find_best_cell(score_matrix)

        if verbose:
            print(f"Max score: {best_score} at position {best_pos}")

        if score_only:
            return best_score

        aligned1, aligned2, start1, start2 = traceback(
            seq1, seq2, backtrace, best_pos, self.gap_symbol
        )

        matches = sum(1 for a, b in zip(aligned1, aligned2)
                      if a == b and a != self.gap_symbol)
        result = AlignmentResult(
            seq1_aligned=aligned1,
            seq2_aligned=aligned2,
            score=best_score,
            start1=start1,
            end1=best_pos[0],
            start2=start2,
            end2=best_pos[1],
            match_string=self._calculate_match_string(aligned1, aligned2),
            identity=matches / len(aligned1) if aligned1 else 0.0,
            gaps=aligned1.count(self.gap_symbol) + aligned2.count(self.gap_symbol),
            seq1_original=seq1,
            seq2_original=seq2,
            gap_symbol=self.gap_symbol,
        )

        if verbose:
            print("✓ Traceback complete!")
            print(result.format())

        return result


def local_alignment(
    seq1: str,
    seq2: str,
    matrix: Optional[PenaltyMatrix] = None,
    scan: ScanMode = "last_row",
    verbose: bool = False
) -> AlignmentResult:
    """
    Local alignment of two sequences

    Parameters:
    -----------
    seq1, seq2 : str
        Sequences to align
    matrix : PenaltyMatrix, optional
        Defaults to the bundled BLOSUM62 (gap symbol '*')
    scan : str
        "last_row" (default) or "full", see LocalAligner

    Examples:
    ---------
    >>> pm = PenaltyMatrix.from_match_mismatch("ACDEF", 1, -1, -1)
    >>> result = local_alignment("ACD", "ACDE", pm)
    >>> result.score, result.seq1_aligned, result.seq2_aligned
    (3, 'ACD', 'ACD')
    """
    if matrix is None:
        matrix = PenaltyMatrix.from_name("BLOSUM62")
    return LocalAligner(matrix, scan=scan).align(seq1, seq2, verbose=verbose)
