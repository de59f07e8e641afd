"""
Penalty (substitution) matrix for residue pairs and gaps
"""
from __future__ import annotations
import copy
from importlib import resources
from typing import Dict, Iterable, List, Optional, Tuple

GAP_SYMBOL = "*"

# Bundled matrices: name -> file in seq_alignment/data
_BUNDLED = {
    "BLOSUM62": "blosum62.txt",
}


class PenaltyMatrix:
    """
    Scores for ordered residue pairs, with a fallback for unseen pairs.

    Pairs are stored as (a, b) keys; (a, b) and (b, a) are independent,
    so a matrix is only symmetric if it was populated that way. A residue
    paired with GAP_SYMBOL gives the gap cost.

    Parameters:
    -----------
    scores : dict, optional
        {(a, b): score} initial entries
    default : int
        Score returned for pairs that were never set (default 0)

    Examples:
    ---------
    >>> pm = PenaltyMatrix()
    >>> pm.set_penalty('A', 'C', -1)
    >>> pm.get_penalty('A', 'C')
    -1
    >>> pm.get_penalty('C', 'A')
    0
    """

    def __init__(self, scores: Optional[Dict[Tuple[str, str], int]] = None, default: int = 0):
        self._scores: Dict[Tuple[str, str], int] = {}
        self.default = int(default)
        if scores:
            for (a, b), score in scores.items():
                self.set_penalty(a, b, score)

    def get_penalty(self, a: str, b: str) -> int:
        return self._scores.get((a, b), self.default)

    def set_penalty(self, a: str, b: str, score: int) -> None:
        self._scores[(a, b)] = int(score)

    def copy(self) -> PenaltyMatrix:
        return copy.deepcopy(self)

    def symbols(self) -> List[str]:
        """Every character that appears in a stored pair"""
        chars = set()
        for a, b in self._scores:
            chars.add(a)
            chars.add(b)
        return sorted(chars)

    def __contains__(self, pair) -> bool:
        return tuple(pair) in self._scores

    def __len__(self) -> int:
        return len(self._scores)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PenaltyMatrix):
            return NotImplemented
        return self.default == other.default and self._scores == other._scores

    def __repr__(self) -> str:
        return f"PenaltyMatrix({len(self._scores)} pairs, default={self.default})"

    @classmethod
    def from_match_mismatch(
        cls,
        alphabet: Iterable[str],
        match: int = 1,
        mismatch: int = -1,
        gap: int = -1,
        gap_symbol: str = GAP_SYMBOL,
        default: int = 0
    ) -> PenaltyMatrix:
        """
        Simple scoring scheme: `match` on the diagonal, `mismatch`
        elsewhere, `gap` for every residue against the gap symbol (both
        orders).
        """
        letters = list(dict.fromkeys(alphabet))
        pm = cls(default=default)
        for a in letters:
            for b in letters:
                pm.set_penalty(a, b, match if a == b else mismatch)
            pm.set_penalty(a, gap_symbol, gap)
            pm.set_penalty(gap_symbol, a, gap)
        return pm

    @classmethod
    def from_name(cls, name: str, default: int = 0) -> PenaltyMatrix:
        """
        Load a matrix shipped with the package

        Example:
            >>> blosum = PenaltyMatrix.from_name("BLOSUM62")
            >>> blosum.get_penalty('W', 'W')
            11
        """
        key = name.upper()
        if key not in _BUNDLED:
            raise ValueError(
                f"Unknown matrix '{name}'. Available: {', '.join(available_matrices())}"
            )
        text = resources.files(__package__).joinpath("data", _BUNDLED[key]).read_text()
        return parse_penalty_matrix(text, default=default)


def available_matrices() -> List[str]:
    return sorted(_BUNDLED)


# =========================
# Matrix file format
# =========================
def _is_int(token: str) -> bool:
    try:
        int(token)
    except ValueError:
        return False
    return True


def parse_penalty_matrix(text: str, default: int = 0) -> PenaltyMatrix:
    """
    Parse a penalty matrix in matrix layout

    The column header is either a line starting with '$' or (NCBI style)
    the first line made only of single non-numeric characters. Every
    other line is a row character followed by one integer per column.
    Lines starting with '#' are comments.

    Args:
        text: Matrix file content
        default: Score for pairs the file does not mention

    Returns:
        PenaltyMatrix: populated matrix
    """
    pm = PenaltyMatrix(default=default)
    columns: Optional[List[str]] = None

    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue

        if stripped.startswith('$'):
            columns = [tok[0] for tok in stripped[1:].split()]
            continue

        tokens = stripped.split()
        if columns is None:
            if all(len(tok) == 1 and not _is_int(tok) for tok in tokens):
                columns = tokens
                continue
            raise ValueError(f"Line {lineno}: scores found before a column header")

        row_char = tokens[0][0]
        values = tokens[1:]
        if len(values) > len(columns):
            raise ValueError(
                f"Line {lineno}: row '{row_char}' has {len(values)} scores "
                f"but the header has {len(columns)} columns"
            )
        for col_char, value in zip(columns, values):
            if not _is_int(value):
                raise ValueError(f"Line {lineno}: '{value}' is not an integer score")
            pm.set_penalty(row_char, col_char, int(value))

    return pm


def read_penalty_matrix(filename: str, default: int = 0) -> PenaltyMatrix:
    """
    Read a penalty matrix file (e.g. a BLOSUM table)

    Example:
        >>> pm = read_penalty_matrix('BLOSUM62.txt')
    """
    with open(filename, 'r') as f:
        return parse_penalty_matrix(f.read(), default=default)


def to_matrix_text(matrix: PenaltyMatrix) -> str:
    """Format a matrix in '$'-header layout; missing pairs get the default"""
    symbols = matrix.symbols()
    lines = ["$ " + " ".join(symbols)]
    for a in symbols:
        row = " ".join(f"{matrix.get_penalty(a, b):>3}" for b in symbols)
        lines.append(f"{a} {row}")
    return "\n".join(lines) + "\n"


def write_penalty_matrix(matrix: PenaltyMatrix, filename: str) -> None:
    with open(filename, 'w') as f:
        f.write(to_matrix_text(matrix))
