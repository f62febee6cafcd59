"""Order execution endpoints."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_current_account_id, get_order_engine
from papertrade.api.schemas import (
    OrderCreateRequest,
    TradeRequest,
    TransactionResponse,
)
from papertrade.domain.models import OrderSide
from papertrade.services import OrderExecutionEngine, OrderRequest

router = APIRouter(tags=["trading"])


@router.post("/orders", response_model=TransactionResponse, status_code=201)
def place_order(
    data: OrderCreateRequest,
    account_id: str = Depends(get_current_account_id),
    engine: OrderExecutionEngine = Depends(get_order_engine),
) -> TransactionResponse:
    """Execute a market order; the committed transaction is the confirmation."""
    txn = engine.execute(
        account_id,
        OrderRequest(symbol=data.symbol, side=data.side, quantity=data.quantity),
    )
    return TransactionResponse.model_validate(txn)


@router.post("/buy", response_model=TransactionResponse, status_code=201)
def buy_stock(
    data: TradeRequest,
    account_id: str = Depends(get_current_account_id),
    engine: OrderExecutionEngine = Depends(get_order_engine),
) -> TransactionResponse:
    """Buy shares at the current price."""
    txn = engine.execute(
        account_id,
        OrderRequest(symbol=data.symbol, side=OrderSide.BUY, quantity=data.quantity),
    )
    return TransactionResponse.model_validate(txn)


@router.post("/sell", response_model=TransactionResponse, status_code=201)
def sell_stock(
    data: TradeRequest,
    account_id: str = Depends(get_current_account_id),
    engine: OrderExecutionEngine = Depends(get_order_engine),
) -> TransactionResponse:
    """Sell shares at the current price."""
    txn = engine.execute(
        account_id,
        OrderRequest(symbol=data.symbol, side=OrderSide.SELL, quantity=data.quantity),
    )
    return TransactionResponse.model_validate(txn)
