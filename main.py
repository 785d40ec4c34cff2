# main.py
from fastapi import FastAPI
from contextlib import asynccontextmanager
import uvicorn

from core.config import get_serial_config, get_api_config
from core.cors import setup_cors
from core.logging_config import setup_logging

from DHT11.infraestructure.dependencies import init_dht_dependencies
from DHT11.infraestructure.routes.routes_dht import router as dht_router
from DHT11.infraestructure.routes.routes_dht import router_ws_dht

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

api_config = get_api_config()
setup_logging(api_config["log_level"])


def create_app(serial_host=None, serial_config: dict | None = None) -> FastAPI:
    serial_config = serial_config or get_serial_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        print("🌡️ Inicializando monitor DHT11...")
        init_dht_dependencies(app, serial_config, host=serial_host)
        print(f"📡 Puerto por defecto: {serial_config['port']} @ {serial_config['baudrate']} baudios")
        yield
        print("Cerrando aplicación...")
        controller = app.state.dht_controller
        if controller.manager.is_connected:
            await controller.disconnect()

    app = FastAPI(
        title="DHT11 Serial Monitor",
        description="Lectura de temperatura y humedad desde un microcontrolador por puerto serial",
        version="1.0.0",
        lifespan=lifespan
    )

    # ============================================
    # MANEJADORES DE ERRORES GLOBALES
    # ============================================
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc: RequestValidationError):
        """Devuelve los errores de validación de Pydantic campo por campo."""
        errors = []
        for error in exc.errors():
            field = " -> ".join(str(loc) for loc in error["loc"])
            errors.append({
                "campo": field,
                "mensaje": error["msg"],
                "tipo_error": error["type"]
            })

        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "error": "Error de validación en los datos enviados",
                "detalles": errors,
                "codigo": 422
            }
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request, exc: StarletteHTTPException):
        mensajes = {
            400: "Solicitud incorrecta",
            404: "Recurso no encontrado",
            405: "Método no permitido",
            409: "Conflicto",
            500: "Error interno del servidor",
            502: "Error de puerta de enlace",
            503: "Servicio no disponible",
        }

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": exc.detail if exc.detail else mensajes.get(exc.status_code, "Error desconocido"),
                "codigo": exc.status_code,
                "mensaje_general": mensajes.get(exc.status_code, "Error desconocido")
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc: Exception):
        """Manejador para cualquier excepción no capturada."""
        import traceback
        print(f"Error no manejado: {exc}")
        traceback.print_exc()

        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": str(exc),
                "codigo": 500,
                "mensaje_general": "Error interno del servidor"
            }
        )

    setup_cors(app)

    app.include_router(router_ws_dht)
    app.include_router(dht_router, tags=["DHT11"])

    @app.get("/ping")
    @app.head("/ping")
    def ping():
        return {"pong": True}

    @app.get("/health")
    def health_check():
        return {
            "status": "healthy",
            "message": "API is running"
        }

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=api_config["host"],
        port=api_config["port"],
        log_level=api_config["log_level"].lower(),
        access_log=True,
        timeout_keep_alive=5,
    )
