import logging
from contextlib import asynccontextmanager

from dishka import make_async_container
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import uvicorn

from messenger_directory.config import Config, load_config
from messenger_directory.core.exceptions import DirectoryError, NotFoundError
from messenger_directory.providers import AdaptersProvider, GatewaysProvider
from messenger_directory.services import AuthAPI, UserAPI

logger = logging.getLogger("messenger_directory")

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.dishka_container.close()

async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

async def directory_error_handler(request: Request, exc: DirectoryError):
    logger.critical("Unhandled directory error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Internal server error"})

def create_app(config: Config | None = None) -> FastAPI:
    config = config or load_config(".env")

    container = make_async_container(
        AdaptersProvider(config),
        GatewaysProvider(),
    )

    app = FastAPI(lifespan=lifespan)
    setup_dishka(container, app)

    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(DirectoryError, directory_error_handler)

    auth_api = AuthAPI(jwt_config=config.jwt, logger=logger)
    user_api = UserAPI(logger=logger, auth_api=auth_api)

    app.include_router(auth_api.get_router())
    app.include_router(user_api.get_router())

    return app

def main():
    config = load_config(".env")
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    app = create_app(config)
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=config.logging.level.lower())

if __name__ == "__main__":
    main()
