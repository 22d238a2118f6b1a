"""
Transaction validation against a pool of unspent outputs.

Validation is a pure query: it reads the pool and never changes it.
"""

from typing import Any, Callable, List, Optional, Tuple, cast

from ledger_crypto.keys import verify_signature
from ledger_transaction.transaction import Transaction, TransactionOutput
from ledger_utxo.pool import UTXOPool

Verifier = Callable[[Any, bytes, Optional[bytes]], bool]


def check_transaction(
    pool: UTXOPool,
    transaction: Transaction,
    verifier: Verifier = verify_signature
) -> Tuple[bool, Optional[str]]:
    """
    Validate a transaction against the given pool.

    A transaction is valid if:
      (1) every output it claims is in the pool,
      (2) the signature on each input is valid,
      (3) no output is claimed more than once,
      (4) every output value is non-negative, and
      (5) the claimed values sum to at least the output values.

    Args:
        pool: Current unspent outputs
        transaction: Candidate transaction
        verifier: Called as verifier(credential, message, signature)

    Returns:
        Tuple of (is_valid: bool, error_message: Optional[str])
    """
    claimed = [tx_input.utxo for tx_input in transaction.inputs]

    for utxo in claimed:
        if not pool.contains(utxo):
            return False, f"Input UTXO {utxo.key()} not found"

    spent = cast(List[TransactionOutput], [pool.get_tx_output(utxo) for utxo in claimed])

    for i, (tx_input, output) in enumerate(zip(transaction.inputs, spent)):
        if not verifier(output.address, transaction.raw_data_to_sign(i), tx_input.signature):
            return False, f"Invalid signature for input {i}"

    if len(set(claimed)) != len(claimed):
        return False, "UTXO claimed more than once"

    for i, output in enumerate(transaction.outputs):
        if not output.value >= 0:
            return False, f"Output {i} has negative or non-numeric value"

    input_sum = sum(output.value for output in spent)
    output_sum = sum(output.value for output in transaction.outputs)
    if not input_sum >= output_sum:
        return False, "Output amount exceeds input amount"

    return True, None


def is_valid_tx(
    pool: UTXOPool,
    transaction: Transaction,
    verifier: Verifier = verify_signature
) -> bool:
    valid, _ = check_transaction(pool, transaction, verifier)
    return valid
