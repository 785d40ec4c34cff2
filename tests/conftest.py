import asyncio

import pytest

from DHT11.domain.errors import OpenError
from DHT11.domain.ports.presenter import Presenter
from DHT11.domain.ports.serial_transport import SerialHost, SerialTransport


class FakeTransport(SerialTransport):
    """Transporte en memoria: los chunks se encolan con push() y eof()."""

    def __init__(self, fail_open=False, fail_cancel=False, fail_close=False):
        self.queue = asyncio.Queue()
        self.fail_open = fail_open
        self.fail_cancel = fail_cancel
        self.fail_close = fail_close
        self.opened_at = None
        self.cancelled = False
        self.closed = False

    def push(self, *chunks):
        for chunk in chunks:
            self.queue.put_nowait(chunk)

    def eof(self):
        self.queue.put_nowait(None)

    def fail(self, error: Exception):
        self.queue.put_nowait(error)

    async def open(self, baudrate):
        if self.fail_open:
            raise OpenError("port busy")
        self.opened_at = baudrate

    async def read(self):
        item = await self.queue.get()
        if isinstance(item, Exception):
            raise item
        return item

    async def cancel(self):
        if self.fail_cancel:
            raise RuntimeError("cancel failed")
        self.cancelled = True
        self.queue.put_nowait(None)

    async def close(self):
        if self.fail_close:
            raise RuntimeError("close failed")
        self.closed = True


class FakeHost(SerialHost):
    def __init__(self, transport=None, supported=True, ports=("/dev/ttyACM0",)):
        self.transport = transport or FakeTransport()
        self.supported = supported
        self.ports = list(ports)
        self.requested = []

    def is_supported(self):
        return self.supported

    def list_ports(self):
        return self.ports

    async def request_port(self, device):
        self.requested.append(device)
        return self.transport


class RecordingPresenter(Presenter):
    def __init__(self):
        self.readings = []
        self.statuses = []
        self.logs = []

    async def show_reading(self, reading):
        self.readings.append((reading.temperature, reading.humidity))

    async def set_status(self, text, kind="neutral"):
        self.statuses.append((text, kind))

    async def append_log(self, message):
        self.logs.append(message)


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def host():
    return FakeHost()
