"""
Sequence records and the ordered corpus they are searched in
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Tuple, Union


@dataclass(frozen=True)
class Sequence:
    """A labelled residue string (e.g. one protein from a FASTA file)"""
    id: str
    sequence: str

    def __len__(self) -> int:
        return len(self.sequence)

    def __str__(self) -> str:
        return f">{self.id}\n{self.sequence}"


class Corpus:
    """
    Ordered, read-only collection of Sequence records.

    Insertion order is kept because the best-match search breaks ties in
    favour of the earliest record.

    Parameters:
    -----------
    records : iterable
        Sequence objects or (id, residues) pairs

    Examples:
    ---------
    >>> corpus = Corpus([("p1", "ACDE"), ("p2", "ACDF")])
    >>> len(corpus)
    2
    >>> corpus[1].id
    'p2'
    """

    def __init__(self, records: Iterable[Union[Sequence, Tuple[str, str]]] = ()):
        items: List[Sequence] = []
        for rec in records:
            if not isinstance(rec, Sequence):
                seq_id, residues = rec
                rec = Sequence(str(seq_id), str(residues))
            if not rec.sequence:
                raise ValueError(f"Sequence '{rec.id}' has an empty residue string")
            items.append(rec)
        self._records: Tuple[Sequence, ...] = tuple(items)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Sequence]:
        return iter(self._records)

    def __getitem__(self, index: int) -> Sequence:
        return self._records[index]

    def __bool__(self) -> bool:
        return len(self._records) > 0

    def __repr__(self) -> str:
        return f"Corpus({len(self._records)} sequences)"

    def ids(self) -> List[str]:
        return [rec.id for rec in self._records]

    def get(self, seq_id: str) -> Sequence:
        """First record carrying the given label"""
        for rec in self._records:
            if rec.id == seq_id:
                return rec
        raise KeyError(seq_id)

    def to_dict(self) -> Dict[str, str]:
        """{id: residues}; for duplicated labels the first record wins"""
        out: Dict[str, str] = {}
        for rec in self._records:
            out.setdefault(rec.id, rec.sequence)
        return out
