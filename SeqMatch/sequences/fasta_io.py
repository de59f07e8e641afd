"""
FASTA reading and writing for sequence corpora
"""
import warnings
from typing import List, Optional, Tuple

from .records import Corpus


def parse_fasta(text: str) -> Corpus:
    """
    Parse FASTA text into a Corpus

    Args:
        text: FASTA content. The label is everything after '>' on the
              header line; residue lines up to the next header are joined.

    Returns:
        Corpus: records in file order

    Example:
        >>> corpus = parse_fasta(">p1\\nACDE\\n>p2\\nACDF\\n")
        >>> corpus.ids()
        ['p1', 'p2']
    """
    records: List[Tuple[str, str]] = []
    label: Optional[str] = None
    chunks: List[str] = []

    def flush():
        if label is None:
            return
        residues = "".join(chunks)
        if residues:
            records.append((label, residues))
        else:
            warnings.warn(f"FASTA record '{label}' has no residues; skipped", stacklevel=3)

    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if line.startswith('>'):
            flush()
            label = line[1:].strip()
            chunks = []
        elif label is not None:
            chunks.append(line)
    flush()

    return Corpus(records)


def read_fasta(filename: str) -> Corpus:
    """
    Read a Corpus from a FASTA file

    Example:
        >>> corpus = read_fasta('proteins.fasta')
    """
    with open(filename, 'r') as f:
        return parse_fasta(f.read())


def to_fasta(corpus: Corpus, line_width: Optional[int] = None) -> str:
    """Format a Corpus as FASTA text"""
    if line_width is not None and line_width <= 0:
        raise ValueError("line_width must be positive")
    lines = []
    for rec in corpus:
        lines.append(f">{rec.id}")
        if line_width is None:
            lines.append(rec.sequence)
        else:
            for start in range(0, len(rec.sequence), line_width):
                lines.append(rec.sequence[start:start + line_width])
    return "\n".join(lines) + "\n" if lines else ""


def write_fasta(corpus: Corpus, filename: str, line_width: Optional[int] = None) -> None:
    """
    Write a Corpus to a FASTA file

    Example:
        >>> write_fasta(corpus, 'proteins.fasta', line_width=60)
    """
    with open(filename, 'w') as f:
        f.write(to_fasta(corpus, line_width))
