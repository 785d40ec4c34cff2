# core/config.py
import os
import platform
from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_serial_config():
    default_port = "COM3" if platform.system() == "Windows" else "/dev/ttyACM0"
    return {
        "enabled": _get_bool("SERIAL_ENABLED", True),
        "port": os.getenv("SERIAL_PORT", default_port),
        "baudrate": int(os.getenv("SERIAL_BAUDRATE", "9600")),
        "read_timeout": float(os.getenv("SERIAL_READ_TIMEOUT", "0.2")),
        "log_max_lines": int(os.getenv("LOG_MAX_LINES", "500")),
    }


def get_api_config():
    return {
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": int(os.getenv("API_PORT", "8000")),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
    }
