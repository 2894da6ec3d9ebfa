"""Account erasure routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status

from sso.application.usecase.account import DeleteUserDataUseCase
from sso.application.usecase.account.delete_user_data import DeleteUserDataRequest

router = APIRouter(prefix="/accounts", tags=["accounts"], route_class=DishkaRoute)


@router.delete("/{account_id}/sso", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_data(
    account_id: int,
    delete_user_data_use_case: FromDishka[DeleteUserDataUseCase],
) -> Response:
    """Remove the SSO binding of a local account.

    Called by the host when an account is deleted or unlinked. Succeeds
    when the account has no binding.
    """
    await delete_user_data_use_case.execute(DeleteUserDataRequest(account_id=account_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
