"""Order execution engine: market buys and sells against the ledger."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from papertrade.core.exceptions import (
    AccountNotFoundError,
    ConflictError,
    InsufficientFundsError,
    InsufficientSharesError,
    OrderConflictError,
    OrderStoreUnavailableError,
    PriceUnavailableError,
    QuoteError,
    StoreUnavailableError,
    ValidationError,
)
from papertrade.core.money import format_cents, to_cents
from papertrade.core.timezone import now_eastern
from papertrade.domain.models import (
    Account,
    AccountMutation,
    Holding,
    HoldingMutation,
    OrderSide,
    Transaction,
)
from papertrade.repositories.protocols import LedgerStore
from papertrade.services.quote_cache import QuoteCache, normalize_symbol

logger = logging.getLogger(__name__)


@dataclass
class OrderRequest:
    """Input data for an immediate market order."""

    symbol: str
    side: OrderSide
    quantity: int


@dataclass(frozen=True)
class OrderPlan:
    """The three writes that together execute one order."""

    account_mutation: AccountMutation
    holding_mutation: HoldingMutation
    transaction: Transaction


def weighted_average_cost(
    old_quantity: int,
    old_average_cost: int,
    fill_quantity: int,
    fill_price: int,
) -> int:
    """Floor of the quantity-weighted average of the old position and a new fill."""
    new_quantity = old_quantity + fill_quantity
    return (old_average_cost * old_quantity + fill_price * fill_quantity) // new_quantity


class OrderExecutionEngine:
    """
    Executes buy/sell market orders.

    Each order runs quote -> load -> validate -> compute -> commit. The
    commit is a single ``apply_order_atomically`` call, so a rejected order
    never leaves a partial effect. A commit that loses a race on the account
    is re-planned from a fresh read up to ``conflict_retries`` times.
    """

    def __init__(
        self,
        ledger_store: LedgerStore,
        quote_cache: QuoteCache,
        conflict_retries: int = 1,
        clock: Callable[[], datetime] = now_eastern,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._store = ledger_store
        self._quotes = quote_cache
        self._conflict_retries = conflict_retries
        self._clock = clock
        self._id_factory = id_factory

    def buy(self, account_id: str, symbol: str, quantity: int) -> Transaction:
        """Buy ``quantity`` shares of ``symbol`` at the current price."""
        return self.execute(account_id, OrderRequest(symbol=symbol, side=OrderSide.BUY, quantity=quantity))

    def sell(self, account_id: str, symbol: str, quantity: int) -> Transaction:
        """Sell ``quantity`` shares of ``symbol`` at the current price."""
        return self.execute(account_id, OrderRequest(symbol=symbol, side=OrderSide.SELL, quantity=quantity))

    def execute(self, account_id: str, request: OrderRequest) -> Transaction:
        """
        Execute an order and return the committed transaction.

        Raises an OrderRejectedError subclass (PriceUnavailableError,
        AccountNotFoundError, InsufficientFundsError, InsufficientSharesError,
        OrderConflictError, OrderStoreUnavailableError) with the ledger left
        exactly as it was before the call.
        """
        symbol, side, quantity = self._validate_request(request)
        price = self._quote_price(symbol)

        attempts = 0
        while True:
            attempts += 1
            try:
                account, holding = self._load(account_id, symbol)
                plan = self._plan(account, holding, symbol, side, quantity, price)
                committed = self._store.apply_order_atomically(
                    plan.account_mutation,
                    plan.holding_mutation,
                    plan.transaction,
                )
            except ConflictError:
                if attempts > self._conflict_retries:
                    logger.warning(
                        "Rejecting %s %d %s for %s: conflicted %d time(s)",
                        side.value, quantity, symbol, account_id, attempts,
                    )
                    raise OrderConflictError(account_id, attempts)
                logger.info("Order on %s conflicted; retrying with a fresh read", account_id)
                continue
            except StoreUnavailableError as exc:
                raise OrderStoreUnavailableError(exc.message) from exc

            logger.info(
                "Committed %s %d %s @ %s for %s (txn %s)",
                side.value, quantity, symbol, format_cents(price),
                account_id, committed.transaction_id,
            )
            return committed

    @staticmethod
    def _validate_request(request: OrderRequest) -> tuple[str, OrderSide, int]:
        symbol = normalize_symbol(request.symbol)
        if not symbol:
            raise ValidationError("Order requires a symbol")
        try:
            side = OrderSide(request.side)
        except ValueError:
            raise ValidationError(f"Unknown order side: {request.side!r}")
        quantity = request.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Order requires a whole quantity > 0")
        return symbol, side, quantity

    def _quote_price(self, symbol: str) -> int:
        """Current price in cents; every failure is PriceUnavailable."""
        try:
            quote = self._quotes.get_price(symbol)
        except QuoteError as exc:
            raise PriceUnavailableError(symbol, exc.message) from exc
        price = to_cents(quote.price)
        if price <= 0:
            raise PriceUnavailableError(symbol, "price rounds to zero cents")
        return price

    def _load(self, account_id: str, symbol: str) -> tuple[Account, Optional[Holding]]:
        account = self._store.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account, self._store.get_holding(account_id, symbol)

    def _plan(
        self,
        account: Account,
        holding: Optional[Holding],
        symbol: str,
        side: OrderSide,
        quantity: int,
        price: int,
    ) -> OrderPlan:
        """Validate against the loaded state and compute the post-order state."""
        amount = price * quantity

        if side == OrderSide.BUY:
            if account.cash < amount:
                raise InsufficientFundsError(requested=amount, available=account.cash)
            new_cash = account.cash - amount
            if holding is None:
                holding_mutation = HoldingMutation(
                    account_id=account.account_id,
                    symbol=symbol,
                    expected_version=None,
                    quantity=quantity,
                    average_cost=price,
                    display_name=self._display_name(symbol),
                )
            else:
                holding_mutation = HoldingMutation(
                    account_id=account.account_id,
                    symbol=symbol,
                    expected_version=holding.version,
                    quantity=holding.quantity + quantity,
                    average_cost=weighted_average_cost(
                        holding.quantity, holding.average_cost, quantity, price
                    ),
                    display_name=holding.display_name,
                )
        else:
            available = holding.quantity if holding else 0
            if holding is None or holding.quantity < quantity:
                raise InsufficientSharesError(symbol, requested=quantity, available=available)
            new_cash = account.cash + amount
            # Sells never touch the remaining position's cost basis
            holding_mutation = HoldingMutation(
                account_id=account.account_id,
                symbol=symbol,
                expected_version=holding.version,
                quantity=holding.quantity - quantity,
                average_cost=holding.average_cost,
                display_name=holding.display_name,
            )

        return OrderPlan(
            account_mutation=AccountMutation(
                account_id=account.account_id,
                expected_version=account.version,
                cash=new_cash,
            ),
            holding_mutation=holding_mutation,
            transaction=Transaction(
                transaction_id=self._id_factory(),
                account_id=account.account_id,
                symbol=symbol,
                side=side,
                quantity=quantity,
                price=price,
                timestamp=self._clock(),
            ),
        )

    def _display_name(self, symbol: str) -> str:
        """Profile name for a first buy; the symbol itself when the profile is unavailable."""
        try:
            return self._quotes.get_profile(symbol).display_name
        except QuoteError as exc:
            logger.warning("No profile for %s (%s); using symbol as display name", symbol, exc.message)
            return symbol
