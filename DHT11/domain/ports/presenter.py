# DHT11/domain/ports/presenter.py
from abc import ABC, abstractmethod
from DHT11.domain.entities.reading import Reading

STATUS_NEUTRAL = "neutral"
STATUS_OK = "ok"
STATUS_ERROR = "error"


class Presenter(ABC):
    @abstractmethod
    async def show_reading(self, reading: Reading): pass

    @abstractmethod
    async def set_status(self, text: str, kind: str = STATUS_NEUTRAL): pass

    @abstractmethod
    async def append_log(self, message: str): pass
