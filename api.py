# api.py
# Run: python api.py  (or: uvicorn api:create_app --factory)
import argparse
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
import uvicorn

from honeypot_radar.core.analyze import HoneypotDetector
from honeypot_radar.logging_setup import setup_logging

load_dotenv()

logger = logging.getLogger("api")

MAX_BATCH = 50


class BatchJob(BaseModel):
    addresses: List[str]
    concurrency: int = Field(default=4, ge=1, le=16)


def create_app(detector: Optional[HoneypotDetector] = None) -> FastAPI:
    """App factory; tests pass a detector wired to a fake transport."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = detector is None
        app.state.detector = detector or HoneypotDetector()
        logger.info("[API] detector ready")
        try:
            yield
        finally:
            if owned:
                await app.state.detector.close()

    app = FastAPI(title="BSC Honeypot Radar API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api = APIRouter(prefix="/api")

    @api.get("/health")
    async def health():
        return {"ok": True}

    @api.get("/honeypot/{address}")
    async def honeypot(address: str, request: Request):
        # a fatal per-token result is still a verdict: 200 with "error" set
        report = await request.app.state.detector.assess_token(address)
        logger.info(f"[API] /honeypot {address} -> level={report.risk_level} honeypot={report.is_honeypot}")
        return report.to_dict()

    @api.post("/batch")
    async def batch(job: BatchJob, request: Request):
        if not job.addresses:
            raise HTTPException(status_code=400, detail="addresses list is empty")
        if len(job.addresses) > MAX_BATCH:
            raise HTTPException(status_code=400, detail=f"at most {MAX_BATCH} addresses per batch")
        reports = await request.app.state.detector.assess_tokens(job.addresses, concurrency=job.concurrency)
        logger.info(f"[API] /batch completed -> {len(reports)} results")
        return {"count": len(reports), "results": [r.to_dict() for r in reports]}

    app.include_router(api)
    return app


def main(argv=None):
    ap = argparse.ArgumentParser(description="BSC Honeypot Radar API")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    args = ap.parse_args(argv)

    setup_logging()
    uvicorn.run(create_app(), host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
