from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from pydantic import ValidationError
import asyncio
import json
import logging
from datetime import datetime, timezone

from config import settings
from models import MonitoringConfig, PeriodicSyncRequest, PushPayload
from services.monitor import TokenMonitor
from services.push import build_notification

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger("main")

monitor = TokenMonitor()

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🔧 Monitor service installed")
    autostart = None
    if settings.has_telegram_credentials:
        config = MonitoringConfig(bot_token=settings.telegram_bot_token, chat_id=settings.telegram_chat_id)
        autostart = asyncio.create_task(monitor.start(config))
        logger.info("🚀 Monitoring auto-started from environment credentials")
    logger.info("✅ Monitor service activated")
    yield
    if autostart is not None and not autostart.done():
        autostart.cancel()
    await monitor.close()

app = FastAPI(title="Solana New Pair Monitor", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {"status": "running", "timestamp": datetime.now(timezone.utc).isoformat()}

@app.get("/health")
async def get_health():
    return monitor.status()

@app.post("/monitoring/start")
async def start_monitoring(config: MonitoringConfig):
    await monitor.start(config)
    return {"status": "started", **monitor.status()}

@app.post("/monitoring/stop")
async def stop_monitoring():
    monitor.stop()
    return {"status": "stopped", **monitor.status()}

@app.post("/periodic-sync")
async def periodic_sync(request: PeriodicSyncRequest):
    ran = await monitor.periodic_sync(request.tag)
    return {"tag": request.tag, "ran": ran}

@app.post("/push")
async def push(payload: PushPayload):
    notification = build_notification(payload)
    await monitor.broadcaster.broadcast(notification)
    return notification.model_dump()

@app.websocket("/ws")
async def client_socket(websocket: WebSocket):
    await websocket.accept()
    monitor.broadcaster.subscribe(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                await monitor.handle_message(json.loads(raw))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning("Ignoring invalid client message: %s", e)
    except WebSocketDisconnect:
        pass
    finally:
        monitor.broadcaster.unsubscribe(websocket)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
