# file_server.py
import os
import socket

from core.config import ServerConfig
from core.logger import logger
from core.network_utils import NetworkUtils
from core.protocol import DOWNLOAD_PATH, UPLOAD_PATH, HttpStatus
from server.handlers import DownloadHandler, UploadHandler
from server.http_request import HttpRequest, MalformedRequestError, parse_request
from server.http_response import send_error_response


class FileServer:
    def __init__(self, config: ServerConfig):
        # =========================================================================
        # CONFIGURACIÓN INICIAL DEL SERVIDOR
        # =========================================================================
        self.shared_dir = config.shared_dir
        self.upload_dir = config.upload_dir
        self.chunk_size = config.chunk_size
        self.client_timeout = config.client_timeout

        self.ensure_directories()

        # Inicializar handlers
        self.download_handler = DownloadHandler(self)
        self.upload_handler = UploadHandler(self)

    def ensure_directories(self):
        """Crea las carpetas compartida y de subidas si no existen"""
        if not os.path.isdir(self.shared_dir):
            os.makedirs(self.shared_dir, exist_ok=True)
            logger.log("SERVER", f"Carpeta {self.shared_dir} creada. Coloque ahí los archivos a compartir.")

        if not os.path.isdir(self.upload_dir):
            os.makedirs(self.upload_dir, exist_ok=True)
            logger.log("SERVER", f"Carpeta {self.upload_dir} creada para los archivos subidos.")

    # =========================================================================
    # MANEJO DE UNA CONEXIÓN
    # =========================================================================

    def handle_connection(self, client: socket.socket, addr):
        """
        Atiende una única petición y cierra la conexión.
        Ningún error sale de aquí: se registra y se libera el socket.
        """
        try:
            if self.client_timeout is not None:
                client.settimeout(self.client_timeout)

            with NetworkUtils.open_reader(client) as reader:
                try:
                    request = parse_request(reader)
                except MalformedRequestError as e:
                    logger.log("REQUEST", f"Petición inválida de {addr}: {e}")
                    send_error_response(client, HttpStatus.BAD_REQUEST.code, HttpStatus.BAD_REQUEST.reason)
                    return

                logger.log("REQUEST", f"{addr} {request.method} {request.path}")
                self.dispatch(client, request, reader)

        except (ConnectionResetError, BrokenPipeError) as e:
            logger.log("NETWORK", f"Cliente {addr} cerró la conexión: {e}")
        except OSError as e:
            logger.log("NETWORK", f"Error de E/S con {addr}: {e}")
        except Exception as e:
            logger.log("NETWORK", f"Error atendiendo a {addr}: {e}")
        finally:
            try:
                client.close()
            except OSError as e:
                logger.log("NETWORK", f"Error cerrando conexión con {addr}: {e}")

    def dispatch(self, client: socket.socket, request: HttpRequest, reader):
        """Elige el handler según la ruta; el método lo valida cada handler"""
        if request.path.startswith(DOWNLOAD_PATH):
            self.download_handler.process(client, request, reader)
        elif request.path == UPLOAD_PATH:
            self.upload_handler.process(client, request, reader)
        else:
            send_error_response(client, HttpStatus.NOT_FOUND.code, HttpStatus.NOT_FOUND.reason)
