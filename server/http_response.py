"""
Construcción y envío de respuestas: línea de estado, cabeceras y cuerpo.

Dos formas:
- texto: Content-Type text/plain, cuerpo en memoria
- archivo: application/octet-stream + Content-Disposition, cuerpo en streaming
Todas las líneas terminan en CRLF.
"""
import socket

from core.network_utils import NetworkUtils
from core.protocol import HttpStatus, build_head, quote_filename, status_line


def build_text_response(status_code: int, status_text: str, body: str) -> bytes:
    body_bytes = body.encode('utf-8')
    head = build_head(status_line(status_code, status_text), [
        ("Content-Type", "text/plain"),
        ("Content-Length", str(len(body_bytes))),
        ("Connection", "close"),
    ])
    return head + body_bytes


def send_text_response(client: socket.socket, status_code: int, status_text: str, body: str):
    NetworkUtils.send_complete_data(client, build_text_response(status_code, status_text, body))


def send_error_response(client: socket.socket, status_code: int, message: str):
    """El mensaje se usa como texto de estado y como cuerpo"""
    send_text_response(client, status_code, message, message)


def send_file_response(client: socket.socket, file_path: str, filename: str,
                       file_size: int, chunk_size: int) -> int:
    head = build_head(status_line(HttpStatus.OK.code, HttpStatus.OK.reason), [
        ("Content-Type", "application/octet-stream"),
        ("Content-Disposition", f"attachment; filename={quote_filename(filename)}"),
        ("Content-Length", str(file_size)),
        ("Connection", "close"),
    ])
    NetworkUtils.send_complete_data(client, head)
    return NetworkUtils.send_file_chunked(client, file_path, file_size, chunk_size)
