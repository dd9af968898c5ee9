# core/protocol.py
from enum import Enum
from typing import Iterable, Tuple

HTTP_VERSION = "HTTP/1.1"
CRLF = "\r\n"

DOWNLOAD_PATH = "/download"
UPLOAD_PATH = "/upload"

UPLOAD_PREFIX = "upload_"
DOWNLOAD_PREFIX = "downloaded_"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

UPLOAD_SUCCESS_MESSAGE = "File uploaded successfully"


class HttpStatus(Enum):
    OK = (200, "OK")
    BAD_REQUEST = (400, "Bad Request")
    NOT_FOUND = (404, "Not Found")
    METHOD_NOT_ALLOWED = (405, "Method Not Allowed")

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def reason(self) -> str:
        return self.value[1]


# Mensajes de error; se usan como texto de estado y como cuerpo
FILENAME_REQUIRED = "Bad Request: filename parameter required"
FILE_NOT_FOUND = "File Not Found"
CONTENT_LENGTH_REQUIRED = "Bad Request: Content-Length header required"
INVALID_CONTENT_LENGTH = "Bad Request: Invalid Content-Length"


def status_line(code: int, reason: str) -> str:
    return f"{HTTP_VERSION} {code} {reason}"


def build_head(start_line: str, headers: Iterable[Tuple[str, str]]) -> bytes:
    """Serializa la línea inicial y las cabeceras, terminando con la línea vacía"""
    lines = [start_line]
    lines.extend(f"{key}: {value}" for key, value in headers)
    return (CRLF.join(lines) + CRLF + CRLF).encode('utf-8')


def quote_filename(filename: str) -> str:
    escaped = filename.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'
