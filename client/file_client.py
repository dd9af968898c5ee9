import socket
from typing import Optional

from core.config import ClientConfig
from core.logger import logger
from client.handlers import UploadHandler, DownloadHandler
from client.result import TransferResult


class FileClient:
    def __init__(self, config: Optional[ClientConfig] = None):
        # =========================================================================
        # CONFIGURACIÓN INICIAL DEL CLIENTE
        # =========================================================================
        config = config or ClientConfig()
        self.host_server = config.host
        self.port_server = config.port
        self.download_dir = config.download_dir
        self.BUFFER_SIZE = config.buffer_size

        # Inicializar handlers
        self.upload_handler = UploadHandler(self)
        self.download_handler = DownloadHandler(self)

        logger.log("CLIENT", f"Cliente de archivos configurado - Servidor: {self.host_server}:{self.port_server}")

    # =========================================================================
    # CONEXIÓN: una por petición (Connection: close)
    # =========================================================================

    def open_connection(self) -> socket.socket:
        """Abre una conexión nueva; quien la usa la cierra"""
        return socket.create_connection((self.host_server, self.port_server))

    # =========================================================================
    # OPERACIONES PRINCIPALES (DELEGADAS A HANDLERS)
    # =========================================================================

    def upload_file(self, file_path: str, progress=None) -> TransferResult:
        return self.upload_handler.process(file_path, progress)

    def download_file(self, filename: str, progress=None) -> TransferResult:
        return self.download_handler.process(filename, progress)
