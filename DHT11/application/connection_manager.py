# DHT11/application/connection_manager.py
import asyncio
import logging
from typing import Optional

from DHT11.domain.errors import AlreadyConnected, OpenError, TransportUnavailable
from DHT11.domain.line_buffer import LineBuffer
from DHT11.domain.line_parser import parse_line
from DHT11.domain.ports.presenter import Presenter, STATUS_ERROR, STATUS_NEUTRAL, STATUS_OK
from DHT11.domain.ports.serial_transport import SerialHost, SerialTransport

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 9600
UNSUPPORTED_MESSAGE = "Serial access not supported on this host"


class ConnectionManager:
    """
    Dueño del ciclo de vida de la conexión serial: abrir, leer en bucle y cerrar.
    Solo existe una conexión a la vez y el bucle de lectura corre si y solo si
    hay un transporte abierto.
    """

    def __init__(
        self,
        host: SerialHost,
        presenter: Presenter,
        baudrate: int = DEFAULT_BAUDRATE,
        default_device: Optional[str] = None,
    ):
        self.host = host
        self.presenter = presenter
        self.baudrate = baudrate
        self.default_device = default_device

        self.transport: Optional[SerialTransport] = None
        self.read_task: Optional[asyncio.Task] = None
        self.keep_reading = False
        self.device: Optional[str] = None
        self._connecting = False
        # Se incrementa en cada cierre; un connect en curso lo compara tras cada await
        self._generation = 0

    @property
    def is_connected(self) -> bool:
        return self.transport is not None

    def state(self) -> dict:
        return {
            "connected": self.is_connected,
            "device": self.device,
            "baudrate": self.baudrate,
        }

    def list_ports(self):
        if not self.host.is_supported():
            return []
        return self.host.list_ports()

    async def toggle(self, device: Optional[str] = None) -> dict:
        if self.is_connected:
            await self.disconnect()
        else:
            await self.connect(device)
        return self.state()

    async def connect(self, device: Optional[str] = None) -> dict:
        if self.is_connected or self._connecting:
            raise AlreadyConnected(f"Ya hay una conexión abierta en {self.device}")

        if not self.host.is_supported():
            logger.error("❌ %s", UNSUPPORTED_MESSAGE)
            await self.presenter.set_status(UNSUPPORTED_MESSAGE, STATUS_ERROR)
            await self.presenter.append_log(UNSUPPORTED_MESSAGE)
            raise TransportUnavailable(UNSUPPORTED_MESSAGE)

        await self.presenter.set_status("Connecting...", STATUS_NEUTRAL)
        device = device or self.default_device

        generation = self._generation
        transport = None
        self._connecting = True
        try:
            transport = await self.host.request_port(device)
            if generation != self._generation:
                logger.info("Conexión abandonada: se pidió el cierre durante la selección del puerto")
                return self.state()
            self.transport = transport
            self.device = device
            await transport.open(self.baudrate)
        except Exception as e:
            if generation != self._generation:
                logger.debug("Error de apertura tras solicitar el cierre: %s", e)
                return self.state()
            await self._report_error(e)
            await self._teardown(reset_status=False)
            if isinstance(e, OpenError):
                raise
            raise OpenError(str(e)) from e
        finally:
            self._connecting = False

        if generation != self._generation:
            # El cierre llegó mientras open() estaba pendiente
            logger.info("Conexión abandonada: se pidió el cierre durante la apertura")
            try:
                await transport.close()
            except Exception as e:
                logger.warning("Error closing port: %s", e)
            return self.state()

        await self.presenter.set_status("Connected", STATUS_OK)
        await self.presenter.append_log(f"Serial port opened at {self.baudrate} baud.")
        logger.info("🔗 Puerto %s abierto a %s baudios", device, self.baudrate)

        self.keep_reading = True
        self.read_task = asyncio.create_task(self._read_loop(transport))
        return self.state()

    async def disconnect(self) -> dict:
        """Cierre best-effort: los fallos de cancel/close se registran y no se propagan."""
        await self._teardown(reset_status=True)
        return self.state()

    async def _read_loop(self, transport: SerialTransport):
        buffer = LineBuffer()
        try:
            while self.keep_reading:
                chunk = await transport.read()
                if chunk is None:
                    break
                for line in buffer.feed(chunk):
                    await self._handle_line(line)
        except Exception as e:
            if not self.keep_reading or self.transport is not transport:
                logger.debug("Error de lectura tras solicitar el cierre: %s", e)
                return
            logger.exception("❌ Error leyendo del puerto serial")
            await self._report_error(e)
            if self.transport is not transport:
                return
            self.read_task = None
            await self._teardown(reset_status=False)
            return

        if self.keep_reading and self.transport is transport:
            # El stream terminó sin que nadie pidiera el cierre
            logger.warning("⚠️ El stream serial terminó (dispositivo desconectado)")
            await self.presenter.append_log("Serial stream ended.")
            if self.transport is not transport:
                return
            self.read_task = None
            await self._teardown(reset_status=True)

    async def _handle_line(self, line: str):
        await self.presenter.append_log(f"Received: {line}")
        reading = parse_line(line)
        if reading is None:
            return
        await self.presenter.show_reading(reading)

    async def _report_error(self, error: Exception):
        message = f"Error: {error}"
        await self.presenter.set_status(message, STATUS_ERROR)
        await self.presenter.append_log(message)

    async def _teardown(self, reset_status: bool):
        self._generation += 1
        self.keep_reading = False
        transport, self.transport = self.transport, None
        task, self.read_task = self.read_task, None
        self.device = None

        if transport is not None:
            cancelled = True
            try:
                await transport.cancel()
            except Exception as e:
                cancelled = False
                logger.warning("Error cancelling reader: %s", e)

            if task is not None and task is not asyncio.current_task():
                if not cancelled:
                    task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
                except Exception as e:
                    logger.warning("Error finishing read loop: %s", e)

            try:
                await transport.close()
            except Exception as e:
                logger.warning("Error closing port: %s", e)

        if reset_status:
            await self.presenter.set_status("Not connected", STATUS_NEUTRAL)
        await self.presenter.append_log("Serial port closed.")
        logger.info("🔌 Puerto serial cerrado")
