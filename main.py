import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.database import ChatDatabase
from config.settings import ConfigurationError, Settings, get_settings
from routes.routes import router

logger = logging.getLogger("chat")

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(message)s"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config = settings or get_settings()
        try:
            app.state.database = await ChatDatabase.connect(config.mongo_uri, config.database_name)
        except Exception:
            logger.exception("Mongo connect error")
            raise
        yield
        app.state.database.close()

    app = FastAPI(title="Chat API", lifespan=lifespan)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return PlainTextResponse("Invalid request", status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    app.include_router(router)
    return app


app = create_app()


def main():
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error(str(e))
        sys.exit(1)

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logger.info("Server running on port: %s", settings.port)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port, lifespan="on")


if __name__ == "__main__":
    main()
