"""Abstract capability set implemented by each pool family."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from poolmath.models.exit import ExitPoolAttributes
from poolmath.models.pool import PoolSnapshot, TokenBalance


class SpotPriceConcern(ABC):
    """Marginal price between two tokens of a pool."""

    @abstractmethod
    def calc_pool_spot_price(self, token_in: str, token_out: str, pool: PoolSnapshot) -> str:
        """Price of token_out in units of token_in, swap fee included.

        Returns:
            Decimal string with up to 18 fractional digits
        """
        ...


class PriceImpactConcern(ABC):
    """Price impact of a join or exit with given token amounts."""

    @abstractmethod
    def calc_price_impact(
        self,
        pool: PoolSnapshot,
        token_amounts: Sequence[int | str],
        is_join: bool,
    ) -> str:
        """Price impact as a decimal fraction string ("0.01" == 1%).

        Args:
            pool: Pool snapshot
            token_amounts: Native amounts, in the snapshot's token order
            is_join: True for a deposit of the amounts, False for a withdrawal
        """
        ...


class LiquidityConcern(ABC):
    """USD value of a pool's balances."""

    @abstractmethod
    def calc_total(self, token_balances: Sequence[TokenBalance]) -> str:
        ...


class ExitConcern(ABC):
    """Builds Vault.exitPool transactions."""

    @abstractmethod
    def build_exit_exact_bpt_in(
        self,
        exiter: str,
        pool: PoolSnapshot,
        bpt_in: int | str,
        slippage: int | str,
        single_token_max_out: str | None = None,
    ) -> ExitPoolAttributes:
        """Exit with an exact BPT amount; minimum amounts out are slippage-bounded."""
        ...

    @abstractmethod
    def build_exit_exact_tokens_out(
        self,
        exiter: str,
        pool: PoolSnapshot,
        tokens_out: Sequence[str],
        amounts_out: Sequence[int | str],
        slippage: int | str,
    ) -> ExitPoolAttributes:
        """Exit for exact token amounts; the BPT burned is slippage-bounded."""
        ...
