from fastapi import FastAPI

from td_device_probe.api.routes import health, debug
from td_device_probe.core.config import settings
from td_device_probe.core.logging import setup_logging

def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(title="TimeDoctor Device Probe")

    app.include_router(health.router, tags=["health"])
    app.include_router(debug.router)

    return app

app = create_app()

@app.get("/")
def root():
    return {"status": "ok", "docs": "/docs"}
