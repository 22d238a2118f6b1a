"""
Implementation of the UTXOPool class for the settlement ledger.

The pool maps each unspent output's identifier to the output itself. It is
plain in-memory state with no locking; one owner mutates it at a time.
"""

from typing import TYPE_CHECKING, Dict, Iterator, List, Mapping, Optional, Union
import copy

from .utxo import UTXO

if TYPE_CHECKING:
    from ledger_transaction.transaction import TransactionOutput


class UTXOPool:
    """
    In-memory set of unspent outputs.

    Attributes:
        _utxos (Dict[UTXO, TransactionOutput]): Maps identifiers to outputs
    """

    def __init__(self, other: Optional[Union['UTXOPool', Mapping[UTXO, 'TransactionOutput']]] = None):
        """
        Initialize a pool, optionally as a deep copy of another.

        Args:
            other: Pool or mapping to copy; later changes to it do not
                   affect this pool and vice versa
        """
        self._utxos: Dict[UTXO, 'TransactionOutput'] = {}
        if other is None:
            return

        source = other._utxos if isinstance(other, UTXOPool) else dict(other)
        for utxo, output in source.items():
            if not isinstance(utxo, UTXO):
                raise ValueError(f"Pool keys must be UTXO instances, got {type(utxo).__name__}")
            self._utxos[utxo] = copy.deepcopy(output)

    def contains(self, utxo: UTXO) -> bool:
        return utxo in self._utxos

    def get_tx_output(self, utxo: UTXO) -> Optional['TransactionOutput']:
        """
        Look up the output for an identifier.

        Callers check contains() first; an absent identifier yields None.
        """
        return self._utxos.get(utxo)

    def add_utxo(self, utxo: UTXO, output: 'TransactionOutput') -> None:
        """Insert or replace the output stored under utxo."""
        self._utxos[utxo] = output

    def remove_utxo(self, utxo: UTXO) -> None:
        """
        Remove a spent output.

        Raises:
            ValueError: If utxo is not in the pool
        """
        if utxo not in self._utxos:
            raise ValueError(f"UTXO {utxo.key()} not found")
        del self._utxos[utxo]

    def all_utxos(self) -> List[UTXO]:
        """Identifiers of every unspent output, sorted."""
        return sorted(self._utxos)

    def get_total_value(self) -> float:
        return sum(output.value for output in self._utxos.values())

    def copy(self) -> 'UTXOPool':
        return UTXOPool(self)

    def __contains__(self, utxo: object) -> bool:
        return utxo in self._utxos

    def __iter__(self) -> Iterator[UTXO]:
        return iter(self.all_utxos())

    def __len__(self) -> int:
        return len(self._utxos)

    def __repr__(self) -> str:
        return f"UTXOPool(size={len(self._utxos)})"
