# DHT11/infraestructure/ws/ws_manager.py
from fastapi import WebSocket, WebSocketDisconnect
from typing import List
import logging

logger = logging.getLogger(__name__)


class WebSocketManager_DHT:
    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"🔗 Cliente WebSocket conectado (DHT11) - Total: {len(self.active_connections)} conectado(s)")

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            logger.info(f"🔌 Cliente WebSocket desconectado (DHT11) - Total: {len(self.active_connections)} conectado(s)")

    async def send_to_connection(self, websocket: WebSocket, data: dict):
        """Envía datos a una conexión específica"""
        try:
            await websocket.send_json(data)
        except Exception as e:
            logger.warning(f"❌ Error enviando datos a conexión específica: {e}")
            self.disconnect(websocket)

    async def send_data(self, data: dict):
        """Envía datos a todas las conexiones activas"""
        if not self.active_connections:
            return

        failed_connections = []

        for conn in self.active_connections[:]:
            try:
                await conn.send_json(data)
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.warning(f"⚠️ Error enviando datos: {e}")
                failed_connections.append(conn)
            except Exception as e:
                logger.error(f"❌ Error enviando datos por WebSocket: {e}")
                failed_connections.append(conn)

        for failed_conn in failed_connections:
            self.disconnect(failed_conn)
