# upload_handler.py (SERVIDOR)
import datetime
import os
import socket
from typing import BinaryIO, Dict, Optional, Tuple

from core.logger import logger
from core.network_utils import NetworkUtils
from core.protocol import (CONTENT_LENGTH_REQUIRED, INVALID_CONTENT_LENGTH, TIMESTAMP_FORMAT,
                           UPLOAD_PREFIX, UPLOAD_SUCCESS_MESSAGE, HttpStatus)
from server.http_request import HttpRequest
from server.http_response import send_error_response, send_text_response


class UploadHandler:
    def __init__(self, file_server):
        self.server = file_server

    def process(self, client: socket.socket, request: HttpRequest, reader: BinaryIO):
        """Procesa POST /upload: guarda exactamente Content-Length bytes del cuerpo"""
        if request.method != "POST":
            send_error_response(client, HttpStatus.METHOD_NOT_ALLOWED.code,
                                HttpStatus.METHOD_NOT_ALLOWED.reason)
            return

        content_length = request.get_header("content-length")
        if content_length is None:
            logger.log("UPLOAD", "Petición sin Content-Length")
            send_error_response(client, HttpStatus.BAD_REQUEST.code, CONTENT_LENGTH_REQUIRED)
            return

        declared_size = parse_content_length(content_length)
        if declared_size is None:
            logger.log("UPLOAD", f"Content-Length inválido: {content_length!r}")
            send_error_response(client, HttpStatus.BAD_REQUEST.code, INVALID_CONTENT_LENGTH)
            return

        base_name = generate_upload_filename(request.headers)
        output_file, filename = self._create_unique_file(base_name)

        # Si el cliente corta antes, el archivo parcial se conserva
        with output_file:
            bytes_received = NetworkUtils.receive_to_file(
                reader, output_file, declared_size, self.server.chunk_size
            )

        if bytes_received < declared_size:
            logger.log("UPLOAD", f"Cuerpo incompleto para {filename}: {bytes_received}/{declared_size} bytes")

        body = f"{UPLOAD_SUCCESS_MESSAGE}: {filename} ({bytes_received} bytes)"
        send_text_response(client, HttpStatus.OK.code, HttpStatus.OK.reason, body)
        logger.log("UPLOAD", f"Archivo recibido: {filename} ({bytes_received} bytes)")

    def _create_unique_file(self, base_name: str) -> Tuple[BinaryIO, str]:
        """
        Crea el archivo destino de forma exclusiva.
        Si el nombre ya existe (misma marca de tiempo) se agrega _1, _2, ... antes de la extensión.
        """
        stem, extension = split_extension(base_name)
        counter = 0
        while True:
            filename = base_name if counter == 0 else f"{stem}_{counter}{extension}"
            try:
                output_file = open(os.path.join(self.server.upload_dir, filename), 'xb')
            except FileExistsError:
                counter += 1
                continue
            if counter:
                logger.log("UPLOAD", f"Nombre {base_name} ocupado, usando {filename}")
            return output_file, filename


def parse_content_length(value: str) -> Optional[int]:
    value = value.strip()
    if not value.isdecimal():
        return None
    return int(value)


def extract_original_filename(headers: Dict[str, str]) -> Optional[str]:
    """Nombre original desde Content-Disposition (filename=) o, si no, X-Filename"""
    content_disposition = headers.get("content-disposition")
    if content_disposition is not None:
        for part in content_disposition.split(";"):
            part = part.strip()
            if part.startswith("filename="):
                filename = part[len("filename="):]
                if len(filename) >= 2 and filename.startswith('"') and filename.endswith('"'):
                    filename = filename[1:-1]
                return filename

    return headers.get("x-filename")


def split_extension(filename: str) -> Tuple[str, str]:
    if "." not in filename:
        return filename, ""
    index = filename.rindex(".")
    return filename[:index], filename[index:]


def generate_upload_filename(headers: Dict[str, str], now: Optional[datetime.datetime] = None) -> str:
    """upload_<yyyyMMdd_HHmmss> más la extensión del nombre original si tiene una"""
    now = now or datetime.datetime.now()
    filename = UPLOAD_PREFIX + now.strftime(TIMESTAMP_FORMAT)

    original = extract_original_filename(headers)
    if original:
        # Solo interesa la extensión; se descarta cualquier componente de ruta
        original = os.path.basename(original.replace("\\", "/"))
        if "." in original:
            filename += split_extension(original)[1]
    return filename
