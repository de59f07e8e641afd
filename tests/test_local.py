"""
Tests for the local alignment engine.

Most cases use a match/mismatch/gap scheme of +1/-1/-1 so the expected
tables can be checked by hand.
"""

import random

import numpy as np
import pytest
from SeqMatch.seq_alignment import (
    GAP_SYMBOL,
    AlignmentResult,
    LocalAligner,
    PenaltyMatrix,
    local_alignment,
    traceback,
)
from SeqMatch.seq_alignment.local import NONE, UP, LEFT, DIAG


@pytest.fixture
def simple_matrix():
    return PenaltyMatrix.from_match_mismatch("ACDEFW", match=1, mismatch=-1, gap=-1)


class TestScoring:
    """Score table construction."""

    def test_prefix_match(self, simple_matrix):
        """ACD against ACDE aligns the shared prefix."""
        result = local_alignment("ACD", "ACDE", simple_matrix)
        assert result.score == 3
        assert result.seq1_aligned == "ACD"
        assert result.seq2_aligned == "ACD"
        assert (result.start1, result.end1) == (0, 3)
        assert (result.start2, result.end2) == (0, 3)

    def test_score_only(self, simple_matrix):
        aligner = LocalAligner(simple_matrix)
        assert aligner.align("ACD", "ACDF", score_only=True) == 3

    def test_zero_floor(self, simple_matrix):
        """No positive pair: score 0 and empty alignment strings."""
        for scan in ("last_row", "full"):
            result = local_alignment("AAA", "CCC", simple_matrix, scan=scan)
            assert result.score == 0
            assert result.seq1_aligned == ""
            assert result.seq2_aligned == ""

    def test_table_never_negative(self, simple_matrix):
        D, B = LocalAligner(simple_matrix).score_matrix("ACDEF", "FEDCA")
        assert D.shape == (6, 6)
        assert (D >= 0).all()
        assert (D[0, :] == 0).all()
        assert (D[:, 0] == 0).all()

    def test_zero_cells_have_no_direction(self, simple_matrix):
        D, B = LocalAligner(simple_matrix).score_matrix("ACDWW", "ACD")
        assert (B[D == 0] == NONE).all()
        assert (B[D > 0] != NONE).all()

    def test_empty_sequences(self, simple_matrix):
        result = local_alignment("", "ACD", simple_matrix)
        assert result.score == 0
        assert result.seq1_aligned == result.seq2_aligned == ""

    def test_blosum62_default(self):
        """Without a matrix the bundled BLOSUM62 is used."""
        result = local_alignment("W", "W")
        assert result.score == 11
        assert result.seq1_aligned == "W"


class TestTieBreak:
    """Direction precedence: left, then diagonal, then up."""

    def test_left_beats_diagonal(self):
        pm = PenaltyMatrix({('A', 'A'): 2, ('A', 'B'): 2})
        D, B = LocalAligner(pm).score_matrix("A", "AB")
        assert D[1, 2] == 2
        assert B[1, 2] == LEFT

    def test_diagonal_beats_up(self):
        pm = PenaltyMatrix({('A', 'A'): 2, ('B', 'A'): 2})
        D, B = LocalAligner(pm).score_matrix("AB", "A")
        assert D[2, 1] == 2
        assert B[2, 1] == DIAG

    def test_up_when_strictly_best(self):
        """A gap in seq2 is emitted as the gap symbol."""
        pm = PenaltyMatrix({('A', 'A'): 2, ('B', 'A'): -5})
        aligner = LocalAligner(pm)
        D, B = aligner.score_matrix("AB", "A")
        assert B[2, 1] == UP
        result = aligner.align("AB", "A")
        assert result.score == 2
        assert result.seq1_aligned == "AB"
        assert result.seq2_aligned == "A" + GAP_SYMBOL


class TestGapOrientation:
    """Gap costs are looked up as (residue, gap) for up and (gap, residue) for left."""

    @pytest.fixture
    def asymmetric_gaps(self):
        return PenaltyMatrix({
            ('A', 'A'): 3,
            ('C', GAP_SYMBOL): 1,
            (GAP_SYMBOL, 'C'): -9,
        })

    def test_gap_in_seq2_uses_residue_gap(self, asymmetric_gaps):
        """Skipping C of seq1 costs (C, *) = +1."""
        result = local_alignment("AC", "A", asymmetric_gaps)
        assert result.score == 4
        assert result.seq1_aligned == "AC"
        assert result.seq2_aligned == "A" + GAP_SYMBOL

    def test_gap_in_seq1_uses_gap_residue(self, asymmetric_gaps):
        """Skipping C of seq2 costs (*, C) = -9, so the alignment stops at A."""
        result = local_alignment("A", "AC", asymmetric_gaps)
        assert result.score == 3
        assert result.seq1_aligned == "A"
        assert result.seq2_aligned == "A"

    def test_tables(self, asymmetric_gaps):
        D, B = LocalAligner(asymmetric_gaps).score_matrix("AC", "A")
        assert D[2, 1] == 4
        assert B[2, 1] == UP
        D, B = LocalAligner(asymmetric_gaps).score_matrix("A", "AC")
        assert D[1, 2] == 0
        assert B[1, 2] == NONE


class TestBestCellScan:
    """Bottom-row scan versus whole-table maximum."""

    def test_last_row_scan(self, simple_matrix):
        """Best cell is searched on the last row of seq1 only."""
        result = local_alignment("ACDWW", "ACD", simple_matrix)
        assert result.score == 1
        assert result.seq1_aligned == "ACDWW"
        assert result.seq2_aligned == "ACD**"
        assert (result.start1, result.end1) == (0, 5)
        assert (result.start2, result.end2) == (0, 3)

    def test_full_scan(self, simple_matrix):
        """Full scan finds the true local optimum."""
        result = local_alignment("ACDWW", "ACD", simple_matrix, scan="full")
        assert result.score == 3
        assert result.seq1_aligned == "ACD"
        assert result.seq2_aligned == "ACD"

    def test_last_row_first_maximum_wins(self, simple_matrix):
        """Equal scores on the bottom row keep the leftmost cell."""
        result = local_alignment("A", "CACA", simple_matrix)
        assert result.score == 1
        assert (result.start2, result.end2) == (1, 2)

    def test_invalid_scan(self, simple_matrix):
        with pytest.raises(ValueError, match="scan"):
            LocalAligner(simple_matrix, scan="diagonal")


class TestTraceback:
    """Pure reconstruction from a backtrace table."""

    def test_walk(self):
        B = np.array([
            [NONE, NONE, NONE],
            [NONE, DIAG, LEFT],
            [NONE, NONE, UP],
        ], dtype=np.int8)
        aligned1, aligned2, i, j = traceback("AC", "AG", B, (2, 2))
        assert aligned1 == "A*C"
        assert aligned2 == "AG*"
        assert (i, j) == (0, 0)

    def test_start_on_none(self):
        B = np.zeros((2, 2), dtype=np.int8)
        assert traceback("A", "A", B, (1, 1)) == ("", "", 1, 1)

    def test_custom_gap_symbol(self):
        B = np.array([[NONE, LEFT], [NONE, NONE]], dtype=np.int8)
        aligned1, aligned2, _, _ = traceback("A", "G", B, (0, 1), gap_symbol='-')
        assert aligned1 == "-"
        assert aligned2 == "G"


class TestAlignmentProperties:
    """Invariants over random protein pairs scored with BLOSUM62."""

    def test_random_pairs(self):
        rng = random.Random(11)
        alphabet = "ACDEFGHIKLMNPQRSTVWY"
        blosum = PenaltyMatrix.from_name("BLOSUM62")
        for scan in ("last_row", "full"):
            aligner = LocalAligner(blosum, scan=scan)
            for _ in range(25):
                s1 = ''.join(rng.choice(alphabet) for _ in range(rng.randint(1, 15)))
                s2 = ''.join(rng.choice(alphabet) for _ in range(rng.randint(1, 15)))
                result = aligner.align(s1, s2)
                assert result.score >= 0
                assert len(result.seq1_aligned) == len(result.seq2_aligned)
                assert result.seq1_aligned.replace(GAP_SYMBOL, "") == s1[result.start1:result.end1]
                assert result.seq2_aligned.replace(GAP_SYMBOL, "") == s2[result.start2:result.end2]

    def test_full_scan_never_below_last_row(self):
        rng = random.Random(3)
        blosum = PenaltyMatrix.from_name("BLOSUM62")
        for _ in range(20):
            s1 = ''.join(rng.choice("ACDEFGHIKL") for _ in range(10))
            s2 = ''.join(rng.choice("ACDEFGHIKL") for _ in range(10))
            restricted = LocalAligner(blosum).align(s1, s2, score_only=True)
            full = LocalAligner(blosum, scan="full").align(s1, s2, score_only=True)
            assert full >= restricted

    def test_deterministic(self, simple_matrix):
        first = local_alignment("ACDEFACDE", "FACDWE", simple_matrix)
        second = local_alignment("ACDEFACDE", "FACDWE", simple_matrix)
        assert first == second


class TestAlignmentResult:
    """Presentation helpers on AlignmentResult."""

    def test_statistics(self, simple_matrix):
        result = local_alignment("ACDWW", "ACD", simple_matrix)
        assert result.nmatch() == 3
        assert result.gaps == 2
        assert result.identity == pytest.approx(3 / 5)
        assert result.match_string == "|||  "
        assert len(result) == 5

    def test_frozen(self, simple_matrix):
        result = local_alignment("ACD", "ACDE", simple_matrix)
        with pytest.raises(Exception):
            result.score = 10

    def test_format_and_plot(self, simple_matrix, capsys):
        result = local_alignment("ACD", "ACDE", simple_matrix)
        text = result.format(width=2)
        assert "pattern: AC" in text
        assert "subject: D" in text
        assert "Score: 3" in text
        result.view()
        assert "pattern: ACD" in capsys.readouterr().out

    def test_str(self, simple_matrix):
        result = local_alignment("ACD", "ACDE", simple_matrix)
        assert "Alignment Score: 3" in str(result)
        assert isinstance(result, AlignmentResult)

    def test_verbose(self, simple_matrix, capsys):
        LocalAligner(simple_matrix).align("ACD", "ACDE", verbose=True)
        out = capsys.readouterr().out
        assert "LOCAL SEQUENCE ALIGNMENT" in out
        assert "Max score: 3" in out
