"""Portfolio valuation and transaction history endpoints."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import (
    get_account_service,
    get_current_account_id,
    get_valuation_service,
)
from papertrade.api.schemas import (
    PortfolioResponse,
    TransactionListResponse,
    TransactionResponse,
)
from papertrade.services import AccountService, PortfolioValuationService

router = APIRouter(tags=["portfolio"])


@router.get("/portfolio", response_model=PortfolioResponse)
def get_portfolio(
    account_id: str = Depends(get_current_account_id),
    valuation: PortfolioValuationService = Depends(get_valuation_service),
) -> PortfolioResponse:
    """
    Value every holding at current prices.

    Also persists the account value (cash + holdings). Fails as a whole if
    any holding cannot be quoted.
    """
    view = valuation.value_portfolio(account_id)
    return PortfolioResponse.model_validate(view)


@router.get("/transactions", response_model=TransactionListResponse)
def get_transaction_history(
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
) -> TransactionListResponse:
    """List executed transactions, newest first."""
    transactions = service.list_transactions(account_id)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )
