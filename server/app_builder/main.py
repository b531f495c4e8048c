import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from app_builder.api.generate import INTERNAL_ERROR_MESSAGE, INVALID_BODY_MESSAGE
from app_builder.api.generate import router as generate_router
from app_builder.core.chain import GenerationPipeline
from app_builder.core.llm_client import CompletionInvoker, build_completion_invoker

load_dotenv()

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 3001))

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)


def create_app(invoker: Optional[CompletionInvoker] = None) -> FastAPI:
    """
    Build the FastAPI application. Without an explicit `invoker` the provider
    client is built from the environment at startup; a missing or placeholder
    API key raises ConfigurationError and the server never starts serving.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.pipeline = GenerationPipeline(invoker or build_completion_invoker())
        yield

    app = FastAPI(title="AI App Builder Backend", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "AI App Builder Server is running!"

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    app.include_router(generate_router, prefix="/api/generate")
    return app


app = create_app()


def run() -> None:
    logger.info("Server listening on port %d", PORT)
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
