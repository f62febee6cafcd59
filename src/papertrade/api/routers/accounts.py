"""Account endpoints."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_account_service, get_current_account_id
from papertrade.api.schemas import AccountResponse
from papertrade.services import AccountService

router = APIRouter(tags=["accounts"])


@router.post("/login", response_model=AccountResponse)
def login(
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Return the caller's account, creating it with the starting cash on first login."""
    account = service.login(account_id)
    return AccountResponse.model_validate(account)


@router.get("/account", response_model=AccountResponse)
def get_account(
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get cash, last valuation and today's change across holdings."""
    account = service.get_account(account_id)
    return AccountResponse.model_validate(account)
