"""
Implementation of the TxHandler class for the settlement ledger.

The handler owns a private copy of the unspent-output pool and settles
batches of candidate transactions against it in a single forward pass.
"""

from typing import Iterable, List, Optional, Tuple
import copy
import logging

from ledger_crypto.keys import verify_signature
from ledger_transaction.transaction import Transaction
from ledger_utxo.pool import UTXOPool
from ledger_utxo.utxo import UTXO
from .validator import Verifier, check_transaction

logger = logging.getLogger(__name__)


class SettlementResult:
    """
    Outcome of settling one batch.

    Attributes:
        accepted (List[Transaction]): Applied transactions, in batch order
        rejected (List[Tuple[Transaction, str]]): Skipped transactions with
            the reason, in batch order
    """

    def __init__(self):
        self.accepted: List[Transaction] = []
        self.rejected: List[Tuple[Transaction, str]] = []


class TxHandler:
    """
    Validates and applies transactions against a private UTXO pool.

    Acceptance is order-sensitive: each transaction is checked against the
    pool as left by every earlier acceptance in the same batch, and rejected
    transactions are never retried.

    Attributes:
        _pool (UTXOPool): Private copy of the unspent outputs
        verifier: Signature check, called as verifier(credential, message, signature)
    """

    def __init__(self, utxo_pool: UTXOPool, verifier: Verifier = verify_signature):
        """
        Initialize handler.

        Args:
            utxo_pool: Snapshot of unspent outputs; copied, never aliased
            verifier: Signature verifier to use for every input
        """
        self._pool = UTXOPool(utxo_pool)
        self.verifier = verifier

    def check_tx(self, transaction: Transaction) -> Tuple[bool, Optional[str]]:
        """Validate against the current pool, returning the failure reason."""
        return check_transaction(self._pool, transaction, self.verifier)

    def is_valid_tx(self, transaction: Transaction) -> bool:
        """
        Check whether transaction is valid against the current pool.

        Safe to call repeatedly; never modifies the pool.
        """
        valid, _ = self.check_tx(transaction)
        return valid

    def handle_txs(self, transactions: Iterable[Transaction]) -> List[Transaction]:
        """
        Settle a batch and return the accepted transactions in batch order.

        Args:
            transactions: Candidate transactions, in the order to consider them

        Returns:
            List of accepted transactions
        """
        return self.settle(transactions).accepted

    def settle(self, transactions: Iterable[Transaction]) -> SettlementResult:
        """
        Settle a batch, reporting both accepted and rejected transactions.

        Args:
            transactions: Candidate transactions, in the order to consider them

        Returns:
            SettlementResult for this batch
        """
        result = SettlementResult()
        submitted = 0

        for tx in transactions:
            submitted += 1
            valid, error = self.check_tx(tx)
            if not valid:
                logger.debug(f"rejected tx {tx.tx_id}: {error}")
                result.rejected.append((tx, error))
                continue

            self._apply(tx)
            result.accepted.append(tx)

        logger.info(
            f"settled batch: accepted {len(result.accepted)}/{submitted}, "
            f"pool size {len(self._pool)}"
        )
        return result

    def _apply(self, transaction: Transaction) -> None:
        """Spend the inputs of a validated transaction and add its outputs."""
        for tx_input in transaction.inputs:
            self._pool.remove_utxo(tx_input.utxo)

        for i, output in enumerate(transaction.outputs):
            self._pool.add_utxo(UTXO(transaction.hash, i), copy.deepcopy(output))

        logger.debug(
            f"applied tx {transaction.tx_id}: spent {len(transaction.inputs)}, "
            f"created {len(transaction.outputs)}"
        )

    def get_utxo_pool(self) -> UTXOPool:
        """Return a copy of the current pool."""
        return UTXOPool(self._pool)
