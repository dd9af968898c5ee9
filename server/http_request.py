"""
Parseo de la línea de petición y las cabeceras, creando un HttpRequest con:
method, path, version, headers (claves en minúscula).

El cuerpo no se consume aquí; cada handler lo lee usando Content-Length.

Política de tolerancia:
- líneas de cabecera sin ': ' se ignoran
- cabecera repetida: gana la última
- fin del stream antes de la línea vacía -> MalformedRequestError
- espacios al final de la línea de petición se ignoran
"""
import re
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Optional
from urllib.parse import unquote_plus

from core.network_utils import LineTooLongError, NetworkUtils

BAD_PERCENT_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")


class MalformedRequestError(ValueError):
    """La petición no se puede interpretar (se responde 400)"""


@dataclass(frozen=True)
class HttpRequest:
    method: str
    path: str
    version: str
    headers: Dict[str, str] = field(default_factory=dict)

    def get_header(self, key: str) -> Optional[str]:
        return self.headers.get(key.lower())

    def query_param(self, name: str) -> Optional[str]:
        return extract_query_param(self.path, name)


def parse_request(reader: BinaryIO) -> HttpRequest:
    try:
        request_line = NetworkUtils.read_line(reader)
        if request_line is None:
            raise MalformedRequestError("Conexión cerrada antes de la línea de petición")

        parts = request_line.split(" ")
        while parts and parts[-1] == "":
            parts.pop()
        if len(parts) != 3:
            raise MalformedRequestError(f"Línea de petición inválida: {request_line!r}")
        method, path, version = parts

        lines, complete = NetworkUtils.read_header_lines(reader)
    except LineTooLongError as e:
        raise MalformedRequestError(str(e)) from e

    if not complete:
        raise MalformedRequestError("Fin del stream antes del final de las cabeceras")

    headers = {}
    for line in lines:
        pair = NetworkUtils.split_header(line)
        if pair is None:
            continue
        key, value = pair
        headers[key] = value

    return HttpRequest(method=method, path=path, version=version, headers=headers)


def url_decode(value: str) -> str:
    """Decodifica %XX y '+'; si el valor está mal codificado devuelve el original"""
    if BAD_PERCENT_PATTERN.search(value):
        return value
    try:
        return unquote_plus(value, errors='strict')
    except UnicodeDecodeError:
        return value


def extract_query_param(path: str, name: str) -> Optional[str]:
    if "?" not in path:
        return None

    query = path.split("?", 1)[1]
    for param in query.split("&"):
        key_value = param.split("=", 1)
        if len(key_value) == 2 and key_value[0] == name:
            return url_decode(key_value[1])
    return None
