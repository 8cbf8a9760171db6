"""
HTTP API - Exposes the latest status and on-demand checks.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.sentinel import Sentinel
from models.subscription import PushSubscription

logger = logging.getLogger('API')


def create_app(sentinel: Optional[Sentinel] = None, start_scheduler: bool = True) -> FastAPI:
    """
    Build the FastAPI application around a Sentinel.

    Args:
        sentinel: Service to expose, built from config and environment if omitted
        start_scheduler: Run the periodic check loop for the app lifetime

    Returns:
        Configured FastAPI app
    """
    sentinel = sentinel or Sentinel()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        loop_task = None
        if start_scheduler:
            loop_task = asyncio.create_task(sentinel.scheduler.run_forever())
        try:
            yield
        finally:
            if loop_task is not None:
                loop_task.cancel()
                try:
                    await loop_task
                except asyncio.CancelledError:
                    pass
            await sentinel.scheduler.shutdown()

    app = FastAPI(title="Sonnet 5 Watch", lifespan=lifespan)
    app.state.sentinel = sentinel
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        return {
            "service": "sonnet5-checker",
            "status": "running",
            "checkInterval": f"{sentinel.scheduler.interval}s",
            "sources": sentinel.source_names,
        }

    @app.get("/health")
    async def health():
        return {"ok": True}

    @app.get("/status")
    async def status():
        return sentinel.status.to_dict()

    @app.post("/check")
    async def check():
        snapshot = await sentinel.perform_check()
        return snapshot.to_dict()

    @app.post("/trigger")
    async def trigger(request: Request):
        expected = sentinel.env.scheduler_secret
        if expected and request.headers.get("Authorization") != f"Bearer {expected}":
            return JSONResponse({"error": "Unauthorized"}, status_code=401)

        snapshot = await sentinel.perform_check()
        return {"triggered": True, "status": snapshot.to_dict()}

    @app.get("/push/vapid-public-key")
    async def vapid_public_key():
        if not sentinel.env.vapid_public_key:
            return JSONResponse({"error": "Web Push not configured"}, status_code=503)
        return {"publicKey": sentinel.env.vapid_public_key}

    @app.post("/push/subscribe")
    async def subscribe(request: Request):
        try:
            data = await request.json()
        except ValueError:
            return JSONResponse({"error": "Invalid subscription"}, status_code=400)

        subscription = PushSubscription.from_dict(data if isinstance(data, dict) else {})
        if not subscription.is_valid():
            return JSONResponse({"error": "Invalid subscription"}, status_code=400)

        try:
            await asyncio.to_thread(sentinel.store.save, subscription)
        except OSError as e:
            logger.error(f"Subscribe error: {e}")
            return JSONResponse({"error": "Failed to save subscription"}, status_code=500)
        return {"success": True}

    @app.delete("/push/subscribe")
    async def unsubscribe(request: Request):
        try:
            data = await request.json()
        except ValueError:
            data = {}

        endpoint = data.get("endpoint") if isinstance(data, dict) else None
        if not endpoint:
            return JSONResponse({"error": "Missing endpoint"}, status_code=400)

        await asyncio.to_thread(sentinel.store.remove, endpoint)
        return {"success": True}

    @app.get("/ntfy/topic")
    async def ntfy_topic():
        return {"topic": sentinel.env.ntfy_topic, "url": sentinel.notifier.ntfy_url}

    return app
