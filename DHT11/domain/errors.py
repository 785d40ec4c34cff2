# DHT11/domain/errors.py


class SerialMonitorError(Exception):
    """Error base del monitor serial."""


class TransportUnavailable(SerialMonitorError):
    """El host no ofrece acceso serial. Terminal para la sesión."""


class OpenError(SerialMonitorError):
    """Falló la selección o apertura del dispositivo. El usuario puede reintentar."""


class ReadError(SerialMonitorError):
    """El transporte falló a mitad de la lectura."""


class AlreadyConnected(SerialMonitorError):
    """Ya hay una conexión abierta o en curso."""
