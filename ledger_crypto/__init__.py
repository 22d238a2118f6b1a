"""
Ledger Settlement - Crypto Module

This module provides the Ed25519 credentials that own transaction outputs
and the signature verifier used when spending them.
"""

from .keys import PrivateKey, PublicKey, verify_signature

__all__ = ['PrivateKey', 'PublicKey', 'verify_signature']
