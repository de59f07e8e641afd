"""
Best-match search of a query against a sequence corpus.

Engines:
- 'lcs'            : LCS length via dynamic programming
- 'lcs_exhaustive' : LCS length via subsequence enumeration (short inputs)
- 'local'          : local alignment score under a PenaltyMatrix

Entries can be scored on a thread pool (`n_jobs`); the winner is always
picked by a sequential pass in corpus order, so a later entry only wins
with a strictly greater score.
"""
from __future__ import annotations

import asyncio
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Literal, Optional

from ..sequences.records import Corpus, Sequence
from ..seq_alignment.lcs import (
    check_exhaustive_length,
    lcs_length,
    lcs_length_exhaustive,
)
from ..seq_alignment.local import AlignmentResult, LocalAligner, ScanMode
from ..seq_alignment.penalty import PenaltyMatrix

Engine = Literal["lcs", "lcs_exhaustive", "local"]
ENGINES = ("lcs", "lcs_exhaustive", "local")


@dataclass(frozen=True)
class BestMatch:
    """Score of one corpus entry against the query"""
    index: int
    record: Sequence
    score: int
    engine: str
    alignment: Optional[AlignmentResult] = None

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def seq1_aligned(self) -> str:
        return self.alignment.seq1_aligned if self.alignment is not None else ""

    @property
    def seq2_aligned(self) -> str:
        return self.alignment.seq2_aligned if self.alignment is not None else ""

    def __str__(self) -> str:
        text = f"Best match: {self.id} (index {self.index})\nEngine: {self.engine}\nScore: {self.score}\n"
        if self.alignment is not None:
            text += f"{self.seq1_aligned}\n{self.seq2_aligned}\n"
        return text


def _check_request(corpus: Corpus, query: str, engine: str) -> None:
    if engine not in ENGINES:
        raise ValueError(f"Unknown engine: {engine}. Expected one of {', '.join(ENGINES)}")
    if len(corpus) == 0:
        raise ValueError("Corpus is empty; best-match search needs at least one sequence")
    if engine == "lcs_exhaustive":
        check_exhaustive_length(query, *(rec.sequence for rec in corpus))


def score_corpus(
    corpus: Corpus,
    query: str,
    engine: Engine = "lcs",
    matrix: Optional[PenaltyMatrix] = None,
    scan: ScanMode = "last_row",
    n_jobs: Optional[int] = 1
) -> List[BestMatch]:
    """
    Score the query against every corpus entry

    Parameters:
    -----------
    corpus : Corpus
        Reference sequences (must not be empty)
    query : str
        Query sequence
    engine : str
        'lcs' | 'lcs_exhaustive' | 'local'
    matrix : PenaltyMatrix, optional
        Used by 'local' only; defaults to the bundled BLOSUM62
    scan : str
        Best-cell scan mode for 'local' ("last_row" or "full")
    n_jobs : int or None
        Worker threads. 1 = sequential, None/0 = all CPUs.

    Returns:
    --------
    list of BestMatch, in corpus order
    """
    _check_request(corpus, query, engine)

    aligner = None
    if engine == "local":
        if matrix is None:
            matrix = PenaltyMatrix.from_name("BLOSUM62")
        aligner = LocalAligner(matrix, scan=scan)

    def _score_entry(index: int) -> BestMatch:
        rec = corpus[index]
        if engine == "local":
            result = aligner.align(query, rec.sequence)
            return BestMatch(index, rec, result.score, engine, result)
        if engine == "lcs":
            score = lcs_length(rec.sequence, query)
        else:
            score = lcs_length_exhaustive(rec.sequence, query)
        return BestMatch(index, rec, score, engine)

    if n_jobs is None or n_jobs <= 0:
        n_jobs = os.cpu_count() or 1

    indices = range(len(corpus))
    if n_jobs == 1 or len(corpus) == 1:
        return [_score_entry(i) for i in indices]

    with ThreadPoolExecutor(max_workers=n_jobs) as ex:
        return list(ex.map(_score_entry, indices))


def best_match(
    corpus: Corpus,
    query: str,
    engine: Engine = "lcs",
    matrix: Optional[PenaltyMatrix] = None,
    scan: ScanMode = "last_row",
    n_jobs: Optional[int] = 1,
    verbose: bool = False
) -> BestMatch:
    """
    Find the corpus entry that scores highest against the query

    Ties keep the earliest entry. The returned BestMatch refers to the
    corpus's own Sequence object.

    Examples:
    ---------
    >>> corpus = Corpus([("p1", "ACDE"), ("p2", "ACDF")])
    >>> pm = PenaltyMatrix.from_match_mismatch("ACDEF", 1, -1, -1)
    >>> hit = best_match(corpus, "ACD", engine="local", matrix=pm)
    >>> hit.id, hit.score, hit.seq1_aligned, hit.seq2_aligned
    ('p1', 3, 'ACD', 'ACD')
    """
    if verbose:
        print("\n" + "=" * 70)
        print("BEST-MATCH SEARCH")
        print("=" * 70)
        print(f"Query: {query}")
        print(f"Engine: {engine}")
        print(f"Corpus size: {len(corpus)}")
        print("=" * 70)

    scores = score_corpus(corpus, query, engine=engine, matrix=matrix, scan=scan, n_jobs=n_jobs)

    best = scores[0]
    for candidate in scores[1:]:
        if candidate.score > best.score:
            best = candidate

    if verbose:
        print(f"✓ Scored {len(scores)} sequences")
        print(best)

    return best


def dynamicprogramming_best_match(corpus: Corpus, query: str, **kwargs) -> BestMatch:
    """Best match by DP LCS length"""
    return best_match(corpus, query, engine="lcs", **kwargs)


def exhaustive_best_match(corpus: Corpus, query: str, **kwargs) -> BestMatch:
    """Best match by exhaustive LCS length (short sequences only)"""
    return best_match(corpus, query, engine="lcs_exhaustive", **kwargs)


def local_alignment_best_match(
    corpus: Corpus,
    query: str,
    matrix: Optional[PenaltyMatrix] = None,
    **kwargs
) -> BestMatch:
    """Best match by local alignment score, with the winning alignment"""
    return best_match(corpus, query, engine="local", matrix=matrix, **kwargs)


# --------- async wrapper ---------

async def best_match_async(
    corpus: Corpus,
    query: str,
    engine: Engine = "lcs",
    matrix: Optional[PenaltyMatrix] = None,
    scan: ScanMode = "last_row",
    n_jobs: Optional[int] = 1
) -> BestMatch:
    """
    Async version: runs best_match in the loop's default executor.
    (Does not speed up the search itself; only keeps the event loop free.)
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None,
        lambda: best_match(
            corpus, query, engine=engine, matrix=matrix,
            scan=scan, n_jobs=n_jobs
        )
    )
