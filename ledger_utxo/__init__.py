"""
Ledger Settlement - UTXO Module

This module implements the UTXO (Unspent Transaction Output) identifiers and
the in-memory pool of outputs that are still spendable.
"""

from .utxo import UTXO
from .pool import UTXOPool

__all__ = ['UTXO', 'UTXOPool']
