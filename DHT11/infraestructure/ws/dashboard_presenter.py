# DHT11/infraestructure/ws/dashboard_presenter.py
import logging
from collections import deque
from datetime import datetime
from typing import Optional

from DHT11.domain.entities.reading import Reading
from DHT11.domain.ports.presenter import Presenter, STATUS_ERROR, STATUS_NEUTRAL, STATUS_OK
from DHT11.infraestructure.ws.ws_manager import WebSocketManager_DHT

logger = logging.getLogger(__name__)

STATUS_KINDS = (STATUS_NEUTRAL, STATUS_OK, STATUS_ERROR)


class DashboardPresenter(Presenter):
    """
    Guarda el estado visible de la página (estado, lecturas y log) y lo
    reenvía a los navegadores conectados por WebSocket.
    """

    def __init__(self, ws_manager: WebSocketManager_DHT, max_log_lines: int = 500):
        self.ws_manager = ws_manager
        self.status_text = "Not connected"
        self.status_kind = STATUS_NEUTRAL
        self.temperature: Optional[str] = None
        self.humidity: Optional[str] = None
        self.log = deque(maxlen=max_log_lines)

    async def show_reading(self, reading: Reading):
        values = reading.display()
        self.temperature = values["temperature"]
        self.humidity = values["humidity"]
        await self.ws_manager.send_data({"type": "reading", **values})

    async def set_status(self, text: str, kind: str = STATUS_NEUTRAL):
        if kind not in STATUS_KINDS:
            raise ValueError(f"Tipo de estado inválido: {kind}")
        self.status_text = text
        self.status_kind = kind
        await self.ws_manager.send_data({"type": "status", "text": text, "kind": kind})

    async def append_log(self, message: str):
        entry = f"[{datetime.now().strftime('%H:%M:%S')}] {message}"
        self.log.append(entry)
        logger.info(message)
        await self.ws_manager.send_data({"type": "log", "line": entry})

    def snapshot(self) -> dict:
        return {
            "status": {"text": self.status_text, "kind": self.status_kind},
            "temperature": self.temperature,
            "humidity": self.humidity,
            "log": list(self.log),
        }
