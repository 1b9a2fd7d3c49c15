"""
Database Services Package für DSP E-Learning Platform

Dieses Paket enthält die Bausteine für Datenbank-Operationen:
- TransactionScope: expliziter Unit-of-Work-Handle über transaction.atomic

Author: DSP Development Team
Version: 1.0.0
"""

from .transaction_scope import ScopeState, TransactionScope, TransactionScopeError

__all__ = ["ScopeState", "TransactionScope", "TransactionScopeError"]
