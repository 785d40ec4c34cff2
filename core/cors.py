# core/cors.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

def setup_cors(app: FastAPI):
    """Configurar CORS para permitir requests desde el frontend"""

    # Lista de orígenes permitidos
    origins = [
        "http://localhost:3000",    # React development server
        "http://localhost:5173",    # Vite development server
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
        "http://localhost:8000",    # Página servida por la propia API
        "http://127.0.0.1:8000",
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    print("🌐 CORS configurado correctamente")
