"""
Console ledger adapter - Implements Ledger protocol.

This module provides a console-based implementation of the domain's
ledger port, logging fee transfers for demo and development use.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleLedger:
    """
    Implements Ledger protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Every transfer is accepted; settlement is left to a real ledger adapter.
    """

    def transfer(self, amount: int, sender: str, recipient: str) -> bool:
        """
        Log a fee transfer (simulates ledger settlement).

        Args:
            amount: Units transferred
            sender: Paying principal
            recipient: Receiving principal (the registry authority)

        Returns:
            Always True
        """
        logger.info("[TRANSFER] amount=%d from=%s to=%s", amount, sender, recipient)
        return True
