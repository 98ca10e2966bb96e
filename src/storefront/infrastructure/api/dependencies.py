"""FastAPI dependencies: caller identity and use-case handlers.

Authentication is an external concern.  Whatever sits in front of this
API resolves the caller and forwards their id and role in the
``X-User-Id`` and ``X-User-Role`` headers.
"""

from fastapi import Header, HTTPException, Request

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.requester import Requester
from storefront.domain.service.pricing_policy import PricingPolicy
from storefront.infrastructure.bootstrap import Repositories


def get_requester(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Requester:
    """Build the explicit caller context for the core."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        return Requester(user_id=x_user_id.strip(), role=Requester.parse_role(x_user_role))
    except ValidationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories


def get_pricing_policy(request: Request) -> PricingPolicy:
    return request.app.state.pricing_policy


