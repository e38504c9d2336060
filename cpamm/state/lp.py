"""
LP share accounting for a single pool.

Tracks the outstanding LP supply together with the per-holder balances that
make it up.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .config import Identity
from .vaults import Amount


@dataclass(frozen=True)
class LPAccountant:
    """
    Immutable LP ledger: ``supply`` and ``holders`` (identity -> balance).

    Notes:
    - Balances are always positive; zero balances are omitted to keep the
      mapping sparse.
    - ``mint``/``burn`` return a new accountant and never touch ``self``.
    """

    supply: Amount = 0
    holders: Dict[Identity, Amount] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.supply, int) or isinstance(self.supply, bool):
            raise TypeError("supply must be an int")
        if self.supply < 0:
            raise ValueError(f"LP supply must be non-negative: {self.supply}")
        for holder, amount in self.holders.items():
            if not isinstance(holder, str) or not holder:
                raise ValueError("LP holder must be a non-empty string")
            if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
                raise ValueError(f"LP balance must be a positive int: {holder}={amount!r}")

    def balance_of(self, holder: Identity) -> Amount:
        """Get LP balance for a holder. Returns 0 if not found."""
        return self.holders.get(holder, 0)

    def mint(self, holder: Identity, amount: Amount) -> "LPAccountant":
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        holders = dict(self.holders)
        new_balance = holders.get(holder, 0) + amount
        if new_balance:
            holders[holder] = new_balance
        return LPAccountant(supply=self.supply + amount, holders=holders)

    def burn(self, holder: Identity, amount: Amount) -> "LPAccountant":
        if amount < 0:
            raise ValueError(f"Burn amount must be non-negative: {amount}")
        current = self.balance_of(holder)
        if amount > current:
            raise ValueError(f"Insufficient LP balance: {current} < {amount}")
        holders = dict(self.holders)
        if current == amount:
            holders.pop(holder, None)
        else:
            holders[holder] = current - amount
        return LPAccountant(supply=self.supply - amount, holders=holders)

    def holders_total(self) -> Amount:
        return sum(self.holders.values())

    def __repr__(self) -> str:
        return f"LPAccountant(supply={self.supply}, {len(self.holders)} holders)"
