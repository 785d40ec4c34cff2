# DHT11/infraestructure/controllers/controller_dht.py
from typing import Optional
from DHT11.application.connection_manager import ConnectionManager
from DHT11.infraestructure.ws.dashboard_presenter import DashboardPresenter


class DHTController:
    def __init__(self, manager: ConnectionManager, presenter: DashboardPresenter):
        self.manager = manager
        self.presenter = presenter

    def list_ports(self):
        return self.manager.list_ports()

    async def connect(self, port: Optional[str] = None):
        return await self.manager.connect(port)

    async def disconnect(self):
        return await self.manager.disconnect()

    async def toggle(self, port: Optional[str] = None):
        return await self.manager.toggle(port)

    def get_state(self):
        return {**self.manager.state(), "ui": self.presenter.snapshot()}
