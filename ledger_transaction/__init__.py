"""
Ledger Settlement - Transaction Module

This module implements the transaction value types: inputs that spend
existing outputs, outputs owned by a credential, and the transaction that
ties them together with its hash and per-input signing messages.
"""

from .transaction import Transaction, TransactionInput, TransactionOutput

__all__ = ['Transaction', 'TransactionInput', 'TransactionOutput']
