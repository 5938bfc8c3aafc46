from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lottery.errors import LotteryError, is_client_error
from app.api.router import api_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Fantasy Draft Lottery")


app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in (os.environ.get("LOTTERY_CORS_ORIGINS") or "*").split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LotteryError)
async def _lottery_error_handler(request: Request, exc: LotteryError):
    """Fallback for LotteryError raised outside the route-level mapping."""
    status = 400 if is_client_error(exc) else 500
    if status >= 500:
        logger.error("LOTTERY_INTERNAL_ERROR path=%s code=%s", request.url.path, exc.code)
    return JSONResponse(status_code=status, content={"detail": {"code": exc.code, "message": exc.message}})


app.include_router(api_router)
