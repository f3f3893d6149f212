"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dealmath.api.routes import calculators, estimates, financing
from dealmath.config import settings
from dealmath.engine.normalize import InputContractError

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="dealmath",
    description="Real estate deal return calculators",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculators.router)
app.include_router(estimates.router)
app.include_router(financing.router)


@app.exception_handler(InputContractError)
async def input_contract_error(request: Request, exc: InputContractError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "field": exc.field},
    )


@app.get("/health")
async def health():
    return {"status": "ok"}
