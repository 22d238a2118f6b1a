"""
Ledger Settlement - Settlement Module

This module validates candidate transactions against the pool of unspent
outputs and settles batches of them, advancing the pool as it goes.
"""

from .validator import check_transaction, is_valid_tx
from .handler import SettlementResult, TxHandler

__all__ = ['check_transaction', 'is_valid_tx', 'SettlementResult', 'TxHandler']
