"""
Implementation of the Transaction class for the settlement ledger.

A transaction consumes previously created outputs through its inputs and
creates new outputs. Each input carries a signature over a message that
depends on the input's position and on every output of the transaction.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple
import hashlib
import struct

from ledger_crypto.keys import PublicKey
from ledger_utxo.utxo import UTXO


def _encode_index(index: int) -> bytes:
    return struct.pack(">I", index)


def _encode_value(value: float) -> bytes:
    return struct.pack(">d", value)


class TransactionInput:
    """
    Represents an input to a transaction (an output being spent).

    Attributes:
        prev_tx_hash (bytes): Hash of the transaction that created the output
        output_index (int): Position of the output in that transaction
        signature (Optional[bytes]): Signature proving ownership, None if unsigned
    """

    def __init__(self, prev_tx_hash: bytes, output_index: int, signature: Optional[bytes] = None):
        if output_index < 0:
            raise ValueError("Output index must be non-negative")

        self._prev_tx_hash = bytes(prev_tx_hash)
        self._output_index = output_index
        self._signature = bytes(signature) if signature is not None else None

    @property
    def prev_tx_hash(self) -> bytes:
        return self._prev_tx_hash

    @property
    def output_index(self) -> int:
        return self._output_index

    @property
    def signature(self) -> Optional[bytes]:
        return self._signature

    @property
    def utxo(self) -> UTXO:
        """Identifier of the output this input spends."""
        return UTXO(self.prev_tx_hash, self.output_index)

    def with_signature(self, signature: bytes) -> 'TransactionInput':
        return TransactionInput(self.prev_tx_hash, self.output_index, signature)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransactionInput):
            return NotImplemented
        return (self.prev_tx_hash == other.prev_tx_hash
                and self.output_index == other.output_index
                and self.signature == other.signature)

    def __repr__(self) -> str:
        return f"TransactionInput({self.prev_tx_hash.hex()[:16]}..., {self.output_index})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "prev_tx_hash": self.prev_tx_hash.hex(),
            "output_index": self.output_index,
            "signature": self.signature.hex() if self.signature is not None else None
        }


class TransactionOutput:
    """
    Represents an output created by a transaction.

    Negative values are accepted here and rejected during validation.

    Attributes:
        value (float): Amount of coins
        address (PublicKey): Credential that may spend this output
    """

    def __init__(self, value: float, address: PublicKey):
        self._value = float(value)
        self._address = address

    @property
    def value(self) -> float:
        return self._value

    @property
    def address(self) -> PublicKey:
        return self._address

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransactionOutput):
            return NotImplemented
        return self.value == other.value and self.address == other.address

    def __repr__(self) -> str:
        return f"TransactionOutput(value={self.value}, address={self.address!r})"

    def to_bytes(self) -> bytes:
        return _encode_value(self.value) + self.address.to_bytes()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "value": self.value,
            "address": self.address.hex()
        }


class Transaction:
    """
    Immutable ledger transaction.

    Attributes:
        inputs (Tuple[TransactionInput, ...]): Outputs being spent, in order
        outputs (Tuple[TransactionOutput, ...]): New outputs, in order
        hash (bytes): SHA-256 digest of the raw transaction
        tx_id (str): Hex form of hash
    """

    def __init__(self, inputs: Sequence[TransactionInput], outputs: Sequence[TransactionOutput]):
        self._inputs = tuple(inputs)
        self._outputs = tuple(outputs)
        self._hash = hashlib.sha256(self.raw_tx()).digest()

    @property
    def inputs(self) -> Tuple[TransactionInput, ...]:
        return self._inputs

    @property
    def outputs(self) -> Tuple[TransactionOutput, ...]:
        return self._outputs

    @property
    def hash(self) -> bytes:
        return self._hash

    @property
    def tx_id(self) -> str:
        return self._hash.hex()

    def raw_data_to_sign(self, index: int) -> bytes:
        """
        Build the message the owner of input `index` must sign:
          prev_tx_hash | output_index | (value | address) for each output

        Args:
            index: Position of the input within this transaction

        Returns:
            bytes: Message to sign

        Raises:
            IndexError: If index does not name an input
        """
        if index < 0 or index >= len(self.inputs):
            raise IndexError(f"Input index {index} out of range")

        tx_input = self.inputs[index]
        parts = [tx_input.prev_tx_hash, _encode_index(tx_input.output_index)]
        parts.extend(out.to_bytes() for out in self.outputs)
        return b"".join(parts)

    def raw_tx(self) -> bytes:
        """Serialize all inputs (with signatures) followed by all outputs."""
        parts: List[bytes] = []
        for tx_input in self.inputs:
            parts.append(tx_input.prev_tx_hash)
            parts.append(_encode_index(tx_input.output_index))
            if tx_input.signature is not None:
                parts.append(tx_input.signature)
        parts.extend(out.to_bytes() for out in self.outputs)
        return b"".join(parts)

    def with_signature(self, index: int, signature: bytes) -> 'Transaction':
        """
        Return a copy of this transaction with input `index` signed.

        Signatures are not covered by raw_data_to_sign, so signing one input
        does not change the message of any other.
        """
        if index < 0 or index >= len(self.inputs):
            raise IndexError(f"Input index {index} out of range")

        inputs = list(self.inputs)
        inputs[index] = inputs[index].with_signature(signature)
        return Transaction(inputs, self.outputs)

    def get_input(self, index: int) -> TransactionInput:
        return self.inputs[index]

    def get_output(self, index: int) -> TransactionOutput:
        return self.outputs[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.hash == other.hash

    def __hash__(self) -> int:
        return hash(self.hash)

    def __repr__(self) -> str:
        return f"Transaction({self.tx_id[:16]}..., inputs={len(self.inputs)}, outputs={len(self.outputs)})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction to dictionary for serialization."""
        return {
            "tx_id": self.tx_id,
            "inputs": [inp.to_dict() for inp in self.inputs],
            "outputs": [out.to_dict() for out in self.outputs]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        """
        Create transaction from dictionary representation.

        Args:
            data: Dictionary with transaction data

        Returns:
            New Transaction instance

        Raises:
            ValueError: If data is invalid or tx_id does not match
        """
        try:
            inputs = [
                TransactionInput(
                    prev_tx_hash=bytes.fromhex(inp["prev_tx_hash"]),
                    output_index=inp["output_index"],
                    signature=bytes.fromhex(inp["signature"]) if inp.get("signature") else None
                )
                for inp in data["inputs"]
            ]
            outputs = [
                TransactionOutput(
                    value=out["value"],
                    address=PublicKey.from_hex(out["address"])
                )
                for out in data["outputs"]
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Error deserializing transaction: {str(e)}")

        tx = cls(inputs=inputs, outputs=outputs)
        if "tx_id" in data and tx.tx_id != data["tx_id"]:
            raise ValueError("Transaction ID mismatch")
        return tx
