import os
from urllib.parse import quote_plus

from core.logger import logger
from core.network_utils import NetworkUtils
from core.protocol import DOWNLOAD_PATH, DOWNLOAD_PREFIX, HTTP_VERSION, build_head
from client.result import TransferResult, read_response_head, read_text_body


class DownloadHandler:
    def __init__(self, client):
        self.client = client

    def process(self, filename: str, progress=None) -> TransferResult:
        """Descarga un archivo de la carpeta compartida del servidor"""
        try:
            with self.client.open_connection() as sock:
                logger.log("DOWNLOAD", f"Conectado al servidor. Solicitando archivo: {filename}")
                NetworkUtils.send_complete_data(sock, self._build_request(filename))

                with NetworkUtils.open_reader(sock) as reader:
                    # Fase 1: Línea de estado y cabeceras
                    head = read_response_head(reader)
                    if head is None:
                        logger.log("DOWNLOAD", "El servidor no respondió")
                        return TransferResult(success=False, message="No response from server")

                    if not head.ok:
                        return self._handle_error(reader, head)

                    # Fase 2: Cuerpo hacia el archivo local
                    return self._receive_file(reader, head, filename, progress)

        except OSError as e:
            logger.log("DOWNLOAD", f"Error durante descarga: {e}")
            return TransferResult(success=False, message=str(e))

    def _build_request(self, filename: str) -> bytes:
        target = f"{DOWNLOAD_PATH}?filename={quote_plus(filename)}"
        return build_head(f"GET {target} {HTTP_VERSION}", [
            ("Host", f"{self.client.host_server}:{self.client.port_server}"),
            ("Connection", "close"),
        ])

    def _handle_error(self, reader, head) -> TransferResult:
        """El cuerpo trae el motivo; si viene vacío se muestran las cabeceras (sin Content-Length)"""
        detail = read_text_body(reader, head)
        if not detail:
            detail = "\n".join(line for line in head.raw_lines
                               if not line.lower().startswith("content-length:"))
        logger.log("DOWNLOAD", f"Error del servidor: {head.status_line} - {detail}")
        return TransferResult(success=False, message=detail, status_line=head.status_line)

    def _receive_file(self, reader, head, filename: str, progress) -> TransferResult:
        content_length = head.content_length
        if content_length is not None:
            logger.log("DOWNLOAD", f"Tamaño del archivo: {content_length} bytes")

        os.makedirs(self.client.download_dir, exist_ok=True)
        local_path = os.path.join(self.client.download_dir, DOWNLOAD_PREFIX + os.path.basename(filename))

        with open(local_path, 'wb') as output_file:
            received = NetworkUtils.receive_to_file(reader, output_file, content_length,
                                                    self.client.BUFFER_SIZE, progress)
        if content_length == 0 and progress:
            progress(0, 0)

        if content_length is not None and received < content_length:
            logger.log("DOWNLOAD", f"Descarga incompleta: {received}/{content_length} bytes")
            return TransferResult(success=False, message="Incomplete download", status_line=head.status_line,
                                  local_path=local_path, bytes_transferred=received)

        logger.log("DOWNLOAD", f"Descarga completada: {local_path} - {received} bytes recibidos")
        return TransferResult(success=True, message="Download complete", status_line=head.status_line,
                              local_path=local_path, remote_name=filename, bytes_transferred=received)
