# DHT11/domain/ports/serial_transport.py
from abc import ABC, abstractmethod
from typing import List, Optional


class SerialTransport(ABC):
    @abstractmethod
    async def open(self, baudrate: int): pass

    @abstractmethod
    async def read(self) -> Optional[str]:
        """Siguiente chunk de texto decodificado, o None al terminar el stream."""

    @abstractmethod
    async def cancel(self): pass

    @abstractmethod
    async def close(self): pass


class SerialHost(ABC):
    @abstractmethod
    def is_supported(self) -> bool: pass

    @abstractmethod
    def list_ports(self) -> List[str]: pass

    @abstractmethod
    async def request_port(self, device: Optional[str]) -> SerialTransport: pass
