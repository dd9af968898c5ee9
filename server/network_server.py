# network_server.py
import socket
import threading
from typing import Optional, Tuple

from core.config import ServerConfig
from core.logger import logger
from core.protocol import DOWNLOAD_PATH, UPLOAD_PATH
from server.file_server import FileServer
from server.worker_pool import WorkerPool


class NetworkServer:
    """Contexto del servidor: socket de escucha, pool de workers y FileServer"""

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self.host = self.config.host
        self.port = self.config.port
        self.file_server = FileServer(self.config)
        self.pool = WorkerPool(self.config.pool_size, self.config.queue_size)
        self.socket = None
        self.running = False
        self.ready = threading.Event()
        self.stop_lock = threading.Lock()

    @property
    def address(self) -> Tuple[str, int]:
        return self.host, self.port

    def open(self):
        """Crea el socket de escucha; con port=0 se toma el puerto asignado"""
        self.socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.socket.bind((self.host, self.port))
        self.socket.listen(self.config.backlog)
        self.socket.settimeout(1.0)  # Timeout para poder verificar self.running
        self.port = self.socket.getsockname()[1]
        self.running = True
        self.pool.start()

        logger.log("SERVER", f"Servidor HTTP de archivos iniciado en {self.host}:{self.port}")
        logger.log("SERVER", "Endpoints:")
        logger.log("SERVER", f"  GET  {DOWNLOAD_PATH}?filename=<filename> - Descargar un archivo")
        logger.log("SERVER", f"  POST {UPLOAD_PATH} - Subir un archivo")
        logger.log("SERVER", f"Workers: {self.pool.size}, cola: {self.config.queue_size}")
        self.ready.set()

    def start(self):
        """Inicia el servidor y bloquea en el bucle de accept"""
        try:
            if self.socket is None:
                self.open()
            self._accept_connections()
        except Exception as e:
            logger.log("SERVER", f"Error iniciando servidor: {e}")
            raise
        finally:
            self.stop()

    def start_in_background(self) -> threading.Thread:
        """Abre el socket y corre el bucle de accept en un hilo propio"""
        self.open()
        thread = threading.Thread(target=self.start, name="Listener", daemon=True)
        thread.start()
        return thread

    def _accept_connections(self):
        """Acepta conexiones y las entrega al pool"""
        logger.log("SERVER", "Esperando conexiones...")
        server_socket = self.socket

        while self.running:
            try:
                client_socket, addr = server_socket.accept()
            except socket.timeout:
                # Timeout normal, verificar si debemos continuar
                continue
            except OSError as e:
                # Error cuando el socket se cierra durante accept()
                if self.running:
                    logger.log("SERVER", f"Error aceptando conexión: {e}")
                break

            logger.log("NETWORK", f"CLIENT_CONNECTED: client_address={addr[0]}, client_port={addr[1]}")
            try:
                # Bloquea si la cola está llena
                self.pool.submit(self.file_server.handle_connection, client_socket, addr)
            except RuntimeError:
                client_socket.close()
                break

    def stop(self):
        """Detiene el servidor; las conexiones en curso terminan"""
        with self.stop_lock:
            if not self.running and self.socket is None:
                return
            logger.log("SERVER", "Deteniendo servidor...")
            self.running = False
            if self.socket:
                self.socket.close()
                self.socket = None
        self.pool.shutdown(wait=True)
        self.ready.clear()
        logger.log("SERVER", "Servidor detenido")
