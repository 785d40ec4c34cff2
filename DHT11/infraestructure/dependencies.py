# DHT11/infraestructure/dependencies.py
from fastapi import FastAPI
from DHT11.application.connection_manager import ConnectionManager
from DHT11.infraestructure.serial.dht_serial_transport import PySerialHost
from DHT11.infraestructure.ws.ws_manager import WebSocketManager_DHT
from DHT11.infraestructure.ws.dashboard_presenter import DashboardPresenter
from DHT11.infraestructure.controllers.controller_dht import DHTController

def init_dht_dependencies(app: FastAPI, serial_config: dict, host=None):
    if host is None:
        host = PySerialHost(
            enabled=serial_config["enabled"],
            read_timeout=serial_config["read_timeout"]
        )
    ws_manager = WebSocketManager_DHT()
    presenter = DashboardPresenter(ws_manager, max_log_lines=serial_config["log_max_lines"])
    manager = ConnectionManager(
        host,
        presenter,
        baudrate=serial_config["baudrate"],
        default_device=serial_config["port"]
    )

    app.state.dht_ws_manager = ws_manager
    app.state.dht_controller = DHTController(manager, presenter)
