# DHT11/domain/entities/reading.py
from datetime import datetime
from pydantic import BaseModel, Field


class Reading(BaseModel):
    temperature: float
    humidity: float
    timestamp: datetime = Field(default_factory=datetime.now)

    def display(self) -> dict:
        """Valores redondeados a un decimal, solo para mostrar."""
        return {
            "temperature": f"{self.temperature:.1f}",
            "humidity": f"{self.humidity:.1f}",
        }
