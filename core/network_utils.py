import socket
from typing import BinaryIO, Callable, List, Optional, Tuple

ProgressCallback = Callable[[int, int], None]


class LineTooLongError(ValueError):
    """Una línea de la cabecera supera MAX_LINE bytes"""


class NetworkUtils:
    """Utilidades compartidas para el framing de bytes sobre la conexión"""

    BUFFER_SIZE = 8192
    MAX_LINE = 8192

    @staticmethod
    def open_reader(sock: socket.socket) -> BinaryIO:
        """Lector con buffer sobre el socket; cabeceras y cuerpo salen del mismo lector"""
        return sock.makefile('rb')

    @staticmethod
    def read_line(reader: BinaryIO) -> Optional[str]:
        """Lee una línea terminada en LF o CRLF; None si el stream terminó"""
        raw = reader.readline(NetworkUtils.MAX_LINE + 1)
        if not raw:
            return None
        if len(raw) > NetworkUtils.MAX_LINE and not raw.endswith(b"\n"):
            raise LineTooLongError(f"Línea mayor a {NetworkUtils.MAX_LINE} bytes")
        if raw.endswith(b"\n"):
            raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]
        return raw.decode('utf-8', errors='replace')

    @staticmethod
    def read_header_lines(reader: BinaryIO) -> Tuple[List[str], bool]:
        """
        Lee líneas hasta la línea vacía.
        Devuelve (líneas, completo); completo es False si el stream terminó antes.
        """
        lines = []
        while True:
            line = NetworkUtils.read_line(reader)
            if line is None:
                return lines, False
            if line == "":
                return lines, True
            lines.append(line)

    @staticmethod
    def split_header(line: str) -> Optional[Tuple[str, str]]:
        """Separa 'Clave: valor' en el primer ': '; None si no tiene esa forma"""
        parts = line.split(": ", 1)
        if len(parts) != 2:
            return None
        return parts[0].lower(), parts[1]

    @staticmethod
    def send_complete_data(sock: socket.socket, data: bytes):
        """Envía todos los datos garantizando la entrega completa"""
        sock.sendall(data)

    @staticmethod
    def send_file_chunked(sock: socket.socket, file_path: str, file_size: int,
                          chunk_size: int = BUFFER_SIZE,
                          progress: Optional[ProgressCallback] = None) -> int:
        """Envía hasta file_size bytes del archivo en chunks"""
        bytes_sent = 0
        with open(file_path, 'rb') as file:
            while bytes_sent < file_size:
                chunk = file.read(min(chunk_size, file_size - bytes_sent))
                if not chunk:
                    break
                sock.sendall(chunk)
                bytes_sent += len(chunk)
                if progress:
                    progress(bytes_sent, file_size)
        return bytes_sent

    @staticmethod
    def receive_to_file(reader: BinaryIO, output_file: BinaryIO, total_size: Optional[int],
                        chunk_size: int = BUFFER_SIZE,
                        progress: Optional[ProgressCallback] = None) -> int:
        """
        Copia del lector al archivo.
        Con total_size cada lectura se limita a lo que falta; sin él se copia hasta EOF.
        """
        bytes_received = 0
        while total_size is None or bytes_received < total_size:
            if total_size is None:
                to_read = chunk_size
            else:
                to_read = min(chunk_size, total_size - bytes_received)
            chunk = reader.read1(to_read)
            if not chunk:
                break
            output_file.write(chunk)
            bytes_received += len(chunk)
            if progress:
                progress(bytes_received, total_size if total_size is not None else -1)
        return bytes_received

    @staticmethod
    def receive_complete_data(reader: BinaryIO, total_size: int) -> bytes:
        """Recibe hasta total_size bytes (menos si la conexión se cierra)"""
        data = b""
        while len(data) < total_size:
            chunk = reader.read1(min(NetworkUtils.BUFFER_SIZE, total_size - len(data)))
            if not chunk:
                break
            data += chunk
        return data

    @staticmethod
    def receive_until_close(reader: BinaryIO) -> bytes:
        return reader.read()
