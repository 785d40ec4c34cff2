#DHT11/infraestructure/serial/dht_serial_transport.py
import asyncio
import codecs
import logging
import threading
from typing import List, Optional

import serial
import serial.tools.list_ports

from DHT11.domain.errors import OpenError, ReadError
from DHT11.domain.ports.serial_transport import SerialHost, SerialTransport

logger = logging.getLogger(__name__)


class DHTSerialTransport(SerialTransport):
    """
    Transporte serial sobre pyserial. Las llamadas bloqueantes se ejecutan en
    un thread del executor para no bloquear el event loop.
    """

    def __init__(self, port: str, read_timeout: float = 0.2):
        self.port = port
        self.read_timeout = read_timeout
        self.ser: Optional[serial.Serial] = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._cancelled = threading.Event()

    async def open(self, baudrate: int):
        loop = asyncio.get_running_loop()
        try:
            self.ser = await loop.run_in_executor(None, self._open_sync, baudrate)
        except serial.SerialException as e:
            raise OpenError(f"No se pudo abrir {self.port}: {e}") from e

    def _open_sync(self, baudrate: int) -> serial.Serial:
        # serial_for_url acepta rutas de dispositivo y URLs de pyserial (loop://, socket://)
        return serial.serial_for_url(self.port, baudrate=baudrate, timeout=self.read_timeout)

    def _read_sync(self) -> Optional[bytes]:
        """Espera datos hasta que lleguen o se cancele la lectura."""
        while not self._cancelled.is_set():
            ser = self.ser
            if ser is None or not ser.is_open:
                return None
            data = ser.read(ser.in_waiting or 1)
            if data:
                return data
        return None

    async def read(self) -> Optional[str]:
        loop = asyncio.get_running_loop()
        while True:
            try:
                data = await loop.run_in_executor(None, self._read_sync)
            except (serial.SerialException, OSError) as e:
                raise ReadError(str(e)) from e
            if data is None:
                return None
            text = self._decoder.decode(data)
            # Un byte multibyte incompleto no produce texto todavía
            if text:
                return text

    async def cancel(self):
        self._cancelled.set()

    async def close(self):
        if self.ser is None:
            return
        ser, self.ser = self.ser, None
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, ser.close)


class PySerialHost(SerialHost):
    def __init__(self, enabled: bool = True, read_timeout: float = 0.2):
        self.enabled = enabled
        self.read_timeout = read_timeout

    def is_supported(self) -> bool:
        return self.enabled

    def list_ports(self) -> List[str]:
        ports = serial.tools.list_ports.comports()
        return [p.device for p in ports]

    async def request_port(self, device: Optional[str]) -> SerialTransport:
        if not device:
            raise OpenError("No se seleccionó ningún puerto serial")
        logger.debug("Puerto solicitado: %s", device)
        return DHTSerialTransport(device, read_timeout=self.read_timeout)
