# config.py
from dataclasses import dataclass
from typing import Optional

# --- Configuración de Red ---
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8080

# --- Configuración del Sistema de Archivos ---
SHARED_FOLDER = "shared_files"
UPLOAD_FOLDER = "uploads"
DOWNLOAD_FOLDER = "downloads"
LOG_FOLDER = "logs"

BUFFER_SIZE = 8192
POOL_SIZE = 10
QUEUE_SIZE = 50
BACKLOG = 50


@dataclass
class ServerConfig:
    """Parámetros con los que se construye un NetworkServer"""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    shared_dir: str = SHARED_FOLDER
    upload_dir: str = UPLOAD_FOLDER
    pool_size: int = POOL_SIZE
    queue_size: int = QUEUE_SIZE
    chunk_size: int = BUFFER_SIZE
    backlog: int = BACKLOG
    # None = sockets bloqueantes sin límite
    client_timeout: Optional[float] = None


@dataclass
class ClientConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    download_dir: str = DOWNLOAD_FOLDER
    buffer_size: int = BUFFER_SIZE


def parse_address_args(argv, default_host: str = DEFAULT_HOST, default_port: int = DEFAULT_PORT):
    """Obtiene (host, port) de los argumentos posicionales de línea de comandos"""
    host = argv[0] if len(argv) > 0 else default_host
    port = default_port
    if len(argv) > 1:
        port = int(argv[1])
        if not 0 <= port <= 65535:
            raise ValueError(f"Puerto fuera de rango: {port}")
    return host, port
