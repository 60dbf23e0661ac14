"""
Collaborators the service talks to at its boundary: who is calling, and who
pays for the storage a new game allocates.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from game.errors import InsufficientDeposit
from .config import MatchConfig


logger = logging.getLogger(__name__)


class IdentityProvider(ABC):
    """Resolves the authenticated id of the caller."""

    @abstractmethod
    def current_player(self) -> str:
        ...


class StaticIdentity(IdentityProvider):
    """Identity set by the host (command line flag, tests)."""

    def __init__(self, player_id: Optional[str] = None):
        self.player_id = player_id

    def current_player(self) -> str:
        if not self.player_id:
            raise RuntimeError("No caller identity has been set")
        return self.player_id


class StorageBiller(ABC):
    """
    Charges a caller for the state a call allocated.

    `settle` is given the storage-usage delta in bytes and the deposit the
    caller attached, and returns the refund owed back to the caller. Raising
    aborts the whole call.

    `pay_refund` is only called once the call's writes have been committed.
    """

    @abstractmethod
    def settle(self, player: str, bytes_allocated: int, attached_deposit: int) -> int:
        ...

    def pay_refund(self, player: str, amount: int):
        pass


class NullBiller(StorageBiller):
    """No cost accounting."""

    def settle(self, player: str, bytes_allocated: int, attached_deposit: int) -> int:
        return 0


@dataclass
class Refund:
    player: str
    amount: int


class DepositBiller(StorageBiller):
    """
    Charges STORAGE_BYTE_COST per allocated byte out of the attached deposit
    and refunds whatever is left over.

    Each paid refund is handed to `on_refund`; moving the funds is up to the
    host. Nothing is kept on the biller itself.
    """

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        on_refund: Optional[Callable[[Refund], None]] = None,
    ):
        self.config = config or MatchConfig()
        self.on_refund = on_refund

    def required_cost(self, bytes_allocated: int) -> int:
        return max(bytes_allocated, 0) * self.config.STORAGE_BYTE_COST

    def settle(self, player: str, bytes_allocated: int, attached_deposit: int) -> int:
        required = self.required_cost(bytes_allocated)
        if required > attached_deposit:
            raise InsufficientDeposit(required, attached_deposit)

        refund = attached_deposit - required
        # Refunds of 1 or less are not worth a transfer
        if refund <= 1:
            return 0

        logger.debug("%d bytes allocated by %s, refund due %d", bytes_allocated, player, refund)
        return refund

    def pay_refund(self, player: str, amount: int):
        logger.info("Refunding %d to %s", amount, player)
        if self.on_refund is not None:
            self.on_refund(Refund(player, amount))
