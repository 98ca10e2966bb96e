"""
Storefront HTTP application.

FastAPI app exposing the cart, checkout, order lifecycle and review
use cases.  Domain exceptions are translated to HTTP status codes here
and nowhere else.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from storefront.domain.exceptions import (
    AuthorizationError,
    BusinessRuleError,
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    StorageError,
    ValidationError,
)
from storefront.domain.service.pricing_policy import PricingPolicy
from storefront.infrastructure import bootstrap
from storefront.infrastructure.api.routes import cart, orders, products
from storefront.infrastructure.bootstrap import Repositories
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.logging_setup import configure_logging

STATUS_BY_EXCEPTION: tuple[tuple[type[DomainException], int], ...] = (
    (ValidationError, 400),
    (BusinessRuleError, 400),
    (AuthorizationError, 403),
    (EntityNotFoundError, 404),
    (StorageError, 500),
)


def status_for(exc: DomainException) -> int:
    for exc_type, status in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status
    return 500


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=status, content={"detail": "Storage failure"})

    content: dict = {"detail": str(exc)}
    if isinstance(exc, InsufficientStockError):
        content["productId"] = exc.product_id
    return JSONResponse(status_code=status, content=content)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def create_app(
    repositories: Repositories | None = None,
    settings: Settings | None = None,
    pricing_policy: PricingPolicy | None = None,
) -> FastAPI:
    """Build the app; tests pass in-memory repositories."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Cart, checkout and order lifecycle API.",
    )
    app.state.repositories = repositories or bootstrap.repositories()
    app.state.pricing_policy = pricing_policy or bootstrap.pricing_policy(settings)

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(cart.router, prefix=f"{settings.api_prefix}/cart", tags=["Cart"])
    app.include_router(orders.router, prefix=f"{settings.api_prefix}/orders", tags=["Orders"])
    app.include_router(
        products.router, prefix=f"{settings.api_prefix}/products", tags=["Products"]
    )

    @app.get("/health", tags=["System"])
    async def health_check() -> dict:
        """Health check endpoint for monitoring."""
        return {"status": "healthy", "version": settings.app_version}

    logger.info(f"{settings.app_name} API ready under {settings.api_prefix}")
    return app
