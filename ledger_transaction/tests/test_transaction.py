"""
Tests for the Transaction class.
"""

import hashlib

import pytest
from ledger_crypto.keys import PrivateKey
from ledger_transaction.transaction import (
    Transaction,
    TransactionInput,
    TransactionOutput
)
from ledger_utxo.utxo import UTXO

@pytest.fixture
def owner():
    """Create a signing key for testing."""
    return PrivateKey.generate()

@pytest.fixture
def sample_input():
    """Create a sample unsigned transaction input."""
    return TransactionInput(prev_tx_hash=b"\x01" * 32, output_index=0)

@pytest.fixture
def sample_output(owner):
    """Create a sample transaction output."""
    return TransactionOutput(value=9.5, address=owner.public_key())

def test_transaction_input(sample_input):
    """Test TransactionInput creation and serialization."""
    assert sample_input.signature is None
    assert sample_input.utxo == UTXO(b"\x01" * 32, 0)

    data = sample_input.to_dict()
    assert data["prev_tx_hash"] == "01" * 32
    assert data["output_index"] == 0
    assert data["signature"] is None

    with pytest.raises(ValueError, match="non-negative"):
        TransactionInput(prev_tx_hash=b"\x01" * 32, output_index=-1)

def test_transaction_output_allows_negative(owner):
    """Test that outputs do not reject negative values at construction."""
    output = TransactionOutput(value=-1.0, address=owner.public_key())
    assert output.value == -1.0
    assert output.to_dict()["address"] == owner.public_key().hex()

def test_transaction_hash(sample_input, sample_output):
    """Test hash computation and stability."""
    tx1 = Transaction(inputs=[sample_input], outputs=[sample_output])
    tx2 = Transaction(inputs=[sample_input], outputs=[sample_output])

    assert tx1.hash == tx2.hash
    assert tx1 == tx2
    assert tx1.hash == hashlib.sha256(tx1.raw_tx()).digest()
    assert tx1.tx_id == tx1.hash.hex()

    other_output = TransactionOutput(value=9.0, address=sample_output.address)
    tx3 = Transaction(inputs=[sample_input], outputs=[other_output])
    assert tx1.hash != tx3.hash

def test_inputs_and_outputs_are_tuples(sample_input, sample_output):
    """Test that the transaction does not alias the caller's lists."""
    inputs = [sample_input]
    tx = Transaction(inputs=inputs, outputs=[sample_output])
    inputs.append(sample_input)

    assert len(tx.inputs) == 1
    assert isinstance(tx.inputs, tuple)
    assert isinstance(tx.outputs, tuple)

def test_raw_data_to_sign_depends_on_position(sample_output):
    """Test that each input has its own signing message."""
    inputs = [
        TransactionInput(prev_tx_hash=b"\x01" * 32, output_index=0),
        TransactionInput(prev_tx_hash=b"\x01" * 32, output_index=1)
    ]
    tx = Transaction(inputs=inputs, outputs=[sample_output])

    assert tx.raw_data_to_sign(0) != tx.raw_data_to_sign(1)
    assert tx.raw_data_to_sign(0).startswith(b"\x01" * 32 + b"\x00\x00\x00\x00")
    assert tx.raw_data_to_sign(0).endswith(sample_output.address.to_bytes())

    with pytest.raises(IndexError):
        tx.raw_data_to_sign(2)

def test_with_signature(owner, sample_input, sample_output):
    """Test signing an input produces a new transaction."""
    tx = Transaction(inputs=[sample_input], outputs=[sample_output])
    message = tx.raw_data_to_sign(0)
    signed = tx.with_signature(0, owner.sign(message))

    assert tx.inputs[0].signature is None
    assert signed.inputs[0].signature is not None
    assert signed.raw_data_to_sign(0) == message
    assert signed.hash != tx.hash
    assert owner.public_key().verify(message, signed.inputs[0].signature)

    with pytest.raises(IndexError):
        tx.with_signature(1, b"sig")

def test_empty_transaction():
    """Test that a transaction without inputs or outputs is constructible."""
    tx = Transaction(inputs=[], outputs=[])
    assert tx.inputs == ()
    assert tx.outputs == ()
    assert tx.hash == hashlib.sha256(b"").digest()

def test_serialization(owner, sample_input, sample_output):
    """Test dictionary round trip and tx_id checking."""
    tx = Transaction(inputs=[sample_input], outputs=[sample_output])
    tx = tx.with_signature(0, owner.sign(tx.raw_data_to_sign(0)))

    restored = Transaction.from_dict(tx.to_dict())
    assert restored == tx
    assert restored.inputs[0] == tx.inputs[0]
    assert restored.outputs[0] == tx.outputs[0]

    data = tx.to_dict()
    data["tx_id"] = "00" * 32
    with pytest.raises(ValueError, match="ID mismatch"):
        Transaction.from_dict(data)

    with pytest.raises(ValueError, match="Error deserializing"):
        Transaction.from_dict({"inputs": [{}], "outputs": []})

def test_transaction_is_read_only(owner, sample_input, sample_output):
    """Test that fields feeding the hash cannot be reassigned."""
    tx = Transaction(inputs=[sample_input], outputs=[sample_output])
    tx = tx.with_signature(0, owner.sign(tx.raw_data_to_sign(0)))
    original_hash = tx.hash

    with pytest.raises(AttributeError):
        tx.inputs[0].signature = b"forged"
    with pytest.raises(AttributeError):
        tx.outputs[0].value = 1e9
    with pytest.raises(AttributeError):
        tx.outputs[0].address = PrivateKey.generate().public_key()
    with pytest.raises(AttributeError):
        tx.hash = b"\x00" * 32

    assert tx.hash == original_hash
    assert tx.hash == hashlib.sha256(tx.raw_tx()).digest()
