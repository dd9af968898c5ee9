import re
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Optional

from core.network_utils import NetworkUtils
from core.protocol import UPLOAD_SUCCESS_MESSAGE

UPLOAD_MESSAGE_PATTERN = re.compile(re.escape(UPLOAD_SUCCESS_MESSAGE) + r": (.+) \((\d+) bytes\)")


@dataclass
class TransferResult:
    """Resultado de una subida o descarga"""
    success: bool
    message: str = ""
    status_line: Optional[str] = None
    local_path: Optional[str] = None
    remote_name: Optional[str] = None
    bytes_transferred: int = 0


@dataclass
class ResponseHead:
    status_line: str
    status_code: Optional[int]
    headers: Dict[str, str] = field(default_factory=dict)
    raw_lines: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return "200 OK" in self.status_line

    @property
    def content_length(self) -> Optional[int]:
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value.strip())
        except ValueError:
            return None


def read_response_head(reader: BinaryIO) -> Optional[ResponseHead]:
    """Lee la línea de estado y las cabeceras; None si el servidor no respondió"""
    status_line = NetworkUtils.read_line(reader)
    if status_line is None:
        return None

    parts = status_line.split(" ", 2)
    status_code = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else None

    lines, _ = NetworkUtils.read_header_lines(reader)
    headers = {}
    for line in lines:
        pair = NetworkUtils.split_header(line)
        if pair is not None:
            headers[pair[0]] = pair[1]
    return ResponseHead(status_line=status_line, status_code=status_code, headers=headers, raw_lines=lines)


def read_text_body(reader: BinaryIO, head: ResponseHead) -> str:
    length = head.content_length
    if length is None:
        data = NetworkUtils.receive_until_close(reader)
    else:
        data = NetworkUtils.receive_complete_data(reader, length)
    return data.decode('utf-8', errors='replace').strip()


def parse_upload_message(message: str):
    """Extrae (nombre remoto, bytes) del mensaje de subida exitosa"""
    match = UPLOAD_MESSAGE_PATTERN.search(message)
    if not match:
        return None, 0
    return match.group(1), int(match.group(2))
