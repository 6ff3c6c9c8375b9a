import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from billsplit.api.v1.routes.balances import router as balances_router
from billsplit.api.v1.routes.split import router as split_router
from billsplit.api.v1.routes.system import router as system_router
from billsplit.core.config import Settings, get_settings
from billsplit.core.exceptions import InvalidSplitError
from billsplit.core.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings

    @app.exception_handler(InvalidSplitError)
    async def invalid_split_handler(request: Request, exc: InvalidSplitError):
        logger.warning(
            "Rejected split input: %s",
            exc.message,
            extra={"path": request.url.path},
        )
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.get("/")
    async def root():
        return {"message": f"{settings.APP_NAME} is live"}

    prefix = settings.API_PREFIX
    app.include_router(system_router, prefix=f"{prefix}/system")
    app.include_router(split_router, prefix=f"{prefix}/splits")
    app.include_router(balances_router, prefix=f"{prefix}/balances")

    logger.info("Application created", extra={"api_prefix": prefix})
    return app


app = create_app()
