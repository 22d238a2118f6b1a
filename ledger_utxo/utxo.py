"""
Implementation of the UTXO class for the settlement ledger.

A UTXO identifies one spendable output by the hash of the transaction that
created it and the output's position in that transaction.
"""

from functools import total_ordering


@total_ordering
class UTXO:
    """
    Identifier of an unspent transaction output.

    Attributes:
        tx_hash (bytes): Hash of the transaction that created the output
        index (int): Position of the output within that transaction
    """

    def __init__(self, tx_hash: bytes, index: int):
        if index < 0:
            raise ValueError("Output index must be non-negative")

        self._tx_hash = bytes(tx_hash)
        self._index = index

    @property
    def tx_hash(self) -> bytes:
        return self._tx_hash

    @property
    def index(self) -> int:
        return self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UTXO):
            return NotImplemented
        return self._tx_hash == other._tx_hash and self._index == other._index

    def __lt__(self, other: 'UTXO') -> bool:
        if not isinstance(other, UTXO):
            return NotImplemented
        return (self._tx_hash, self._index) < (other._tx_hash, other._index)

    def __hash__(self) -> int:
        return hash((self._tx_hash, self._index))

    def __repr__(self) -> str:
        return f"UTXO({self._tx_hash.hex()[:16]}..., {self._index})"

    def key(self) -> str:
        """Human-readable form, `<tx_hash hex>:<index>`."""
        return f"{self._tx_hash.hex()}:{self._index}"
