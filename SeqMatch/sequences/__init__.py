"""
Sequence Records Module
Labelled sequences, ordered corpora and FASTA I/O
"""

from .records import Sequence, Corpus
from .fasta_io import parse_fasta, read_fasta, to_fasta, write_fasta

__all__ = [
    "Sequence",
    "Corpus",
    "parse_fasta",
    "read_fasta",
    "to_fasta",
    "write_fasta",
]
