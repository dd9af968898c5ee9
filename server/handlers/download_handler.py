# download_handler.py (SERVIDOR)
import os
import socket
from typing import Optional

from core.logger import logger
from core.protocol import FILE_NOT_FOUND, FILENAME_REQUIRED, HttpStatus
from server.http_request import HttpRequest
from server.http_response import send_error_response, send_file_response


class DownloadHandler:
    def __init__(self, file_server):
        self.server = file_server

    def process(self, client: socket.socket, request: HttpRequest, reader=None):
        """Procesa GET /download?filename=<nombre>"""
        if request.method != "GET":
            send_error_response(client, HttpStatus.METHOD_NOT_ALLOWED.code,
                                HttpStatus.METHOD_NOT_ALLOWED.reason)
            return

        filename = request.query_param("filename")
        if filename is None:
            logger.log("DOWNLOAD", "Petición sin parámetro filename")
            send_error_response(client, HttpStatus.BAD_REQUEST.code, FILENAME_REQUIRED)
            return

        file_path = self.resolve(filename)
        if file_path is None or not os.path.isfile(file_path):
            logger.log("DOWNLOAD", f"Archivo no encontrado: {filename}")
            send_error_response(client, HttpStatus.NOT_FOUND.code, FILE_NOT_FOUND)
            return

        # Content-Length se fija aquí; si el archivo cambia durante el envío no se envía más de esto
        file_size = os.path.getsize(file_path)
        sent = send_file_response(client, file_path, filename, file_size, self.server.chunk_size)
        logger.log("DOWNLOAD", f"Archivo enviado: {filename} ({sent} bytes)")

    def resolve(self, filename: str) -> Optional[str]:
        """
        Ruta del archivo dentro de la carpeta compartida.
        Solo se aceptan hijos directos de la carpeta; cualquier otra ruta devuelve None.
        """
        if "\x00" in filename:
            logger.log("DOWNLOAD", f"Nombre de archivo con byte nulo: {filename!r}")
            return None

        root = os.path.realpath(self.server.shared_dir)
        candidate = os.path.realpath(os.path.join(root, filename))
        if os.path.dirname(candidate) != root:
            logger.log("DOWNLOAD", f"Acceso denegado fuera de la carpeta compartida: {filename}")
            return None
        return candidate
