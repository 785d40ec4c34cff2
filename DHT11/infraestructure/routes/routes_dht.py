# DHT11/infraestructure/routes/routes_dht.py
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel

from DHT11.domain.errors import AlreadyConnected, OpenError, TransportUnavailable

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router_ws_dht = APIRouter()
router = APIRouter()


class ConnectRequest(BaseModel):
    port: Optional[str] = None


def _connect_error_response(e: Exception) -> JSONResponse:
    if isinstance(e, TransportUnavailable):
        status_code = 503
    elif isinstance(e, AlreadyConnected):
        status_code = 409
    else:
        status_code = 502
    return JSONResponse(status_code=status_code, content={"success": False, "error": str(e)})


@router.get("/", include_in_schema=False)
async def index():
    """Página del monitor de temperatura y humedad."""
    return FileResponse(STATIC_DIR / "index.html")


@router.get("/dht/ports")
async def get_ports(request: Request):
    """Lista los puertos seriales disponibles en el host."""
    controller = request.app.state.dht_controller
    return {"success": True, "data": controller.list_ports()}


@router.get("/dht/state")
async def get_state(request: Request):
    """Estado de la conexión y de la interfaz."""
    controller = request.app.state.dht_controller
    return {"success": True, "data": controller.get_state()}


@router.post("/dht/connect")
async def post_connect(request: Request, payload: Optional[ConnectRequest] = None):
    """Abre el puerto serial e inicia la lectura."""
    controller = request.app.state.dht_controller
    port = payload.port if payload else None
    try:
        state = await controller.connect(port)
    except (TransportUnavailable, OpenError, AlreadyConnected) as e:
        return _connect_error_response(e)
    return {"success": True, "data": state}


@router.post("/dht/disconnect")
async def post_disconnect(request: Request):
    """Cierra el puerto serial. Siempre termina en estado desconectado."""
    controller = request.app.state.dht_controller
    state = await controller.disconnect()
    return {"success": True, "data": state}


@router.post("/dht/toggle")
async def post_toggle(request: Request, payload: Optional[ConnectRequest] = None):
    """Botón único de conectar/desconectar."""
    controller = request.app.state.dht_controller
    port = payload.port if payload else None
    try:
        state = await controller.toggle(port)
    except (TransportUnavailable, OpenError, AlreadyConnected) as e:
        return _connect_error_response(e)
    return {"success": True, "data": state}


@router_ws_dht.websocket("/dht/ws")
async def dht_ws(websocket: WebSocket):
    ws_manager = websocket.app.state.dht_ws_manager
    controller = websocket.app.state.dht_controller
    await ws_manager.connect(websocket)
    await ws_manager.send_to_connection(websocket, {"type": "snapshot", **controller.get_state()})
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        ws_manager.disconnect(websocket)
