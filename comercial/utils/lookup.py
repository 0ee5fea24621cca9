"""Id indexes built once per fetch cycle.

Cross-entity joins (invoice -> contract, invoice -> agent) go through a dict
keyed by id instead of scanning the freshly fetched list for every row.
"""
from typing import Any, Dict, Hashable, Iterable, TypeVar

T = TypeVar('T')


def index_by_id(records: Iterable[T], attr: str = 'id') -> Dict[Hashable, T]:
    """
    Map ``record.<attr>`` to the record.

    Records with a None id are skipped; on duplicate ids the last one wins.

    Examples:
        >>> contracts = index_by_id(contracts_list)
        >>> contracts.get(invoice.contract_id)
    """
    index: Dict[Hashable, T] = {}
    for record in records:
        key = getattr(record, attr, None)
        if key is not None:
            index[key] = record
    return index


def group_by(records: Iterable[T], attr: str) -> Dict[Any, list]:
    """Group records by the value of ``attr`` (insertion order kept)."""
    groups: Dict[Any, list] = {}
    for record in records:
        groups.setdefault(getattr(record, attr, None), []).append(record)
    return groups
