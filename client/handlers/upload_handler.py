import os

from core.logger import logger
from core.network_utils import NetworkUtils
from core.protocol import HTTP_VERSION, UPLOAD_PATH, build_head, quote_filename
from client.result import TransferResult, parse_upload_message, read_response_head, read_text_body


class UploadHandler:
    def __init__(self, client):
        self.client = client

    def process(self, file_path: str, progress=None) -> TransferResult:
        """Sube un archivo local con POST /upload en streaming"""
        if not self._validate_local_file(file_path):
            return TransferResult(success=False, message="Archivo no encontrado o no es un archivo válido")

        filename = os.path.basename(file_path)
        file_size = os.path.getsize(file_path)

        try:
            with self.client.open_connection() as sock:
                logger.log("UPLOAD", f"Conectado al servidor. Subiendo archivo: {filename} ({file_size} bytes)")

                # Fase 1: Cabeceras
                NetworkUtils.send_complete_data(sock, self._build_headers(filename, file_size))

                # Fase 2: Cuerpo en streaming
                sent = NetworkUtils.send_file_chunked(sock, file_path, file_size,
                                                      self.client.BUFFER_SIZE, progress)
                if file_size == 0 and progress:
                    progress(0, 0)
                logger.log("UPLOAD", f"Transmisión completada: {sent} bytes enviados")

                # Fase 3: Respuesta del servidor
                with NetworkUtils.open_reader(sock) as reader:
                    head = read_response_head(reader)
                    if head is None:
                        logger.log("UPLOAD", "El servidor no respondió")
                        return TransferResult(success=False, message="No response from server")
                    message = read_text_body(reader, head)

        except OSError as e:
            logger.log("UPLOAD", f"Error durante subida: {e}")
            return TransferResult(success=False, message=str(e))

        logger.log("UPLOAD", f"Respuesta: {head.status_line} - {message}")
        if not head.ok:
            return TransferResult(success=False, message=message or head.status_line,
                                  status_line=head.status_line, bytes_transferred=sent)

        remote_name, received = parse_upload_message(message)
        return TransferResult(success=True, message=message, status_line=head.status_line,
                              remote_name=remote_name, bytes_transferred=received)

    def _build_headers(self, filename: str, file_size: int) -> bytes:
        return build_head(f"POST {UPLOAD_PATH} {HTTP_VERSION}", [
            ("Host", f"{self.client.host_server}:{self.client.port_server}"),
            ("Content-Type", "application/octet-stream"),
            ("Content-Length", str(file_size)),
            ("X-Filename", filename),
            ("Content-Disposition", f"attachment; filename={quote_filename(filename)}"),
            ("Connection", "close"),
        ])

    def _validate_local_file(self, file_path: str):
        """Valida que el archivo local exista"""
        if not os.path.isfile(file_path):
            logger.log("CLIENT", f"Error: Archivo no encontrado - {file_path}")
            return False
        return True
