from PyQt6.QtCore import QThread, pyqtSignal
from core.logger import logger

class TransferThread(QThread):
    """
    Hilo para ejecutar una subida o descarga sin congelar la interfaz gráfica.
    operation es 'upload' (target = ruta local) o 'download' (target = nombre remoto).
    """
    progress_changed = pyqtSignal(int)
    transfer_finished = pyqtSignal(object)
    transfer_error = pyqtSignal(str)

    def __init__(self, client, operation: str, target: str):
        super().__init__()
        self.client = client
        self.operation = operation
        self.target = target

    def _on_progress(self, done: int, total: int):
        if total < 0:
            return
        percent = 100 if total == 0 else done * 100 // total
        self.progress_changed.emit(percent)

    def run(self):
        try:
            if self.operation == "upload":
                result = self.client.upload_file(self.target, progress=self._on_progress)
            else:
                result = self.client.download_file(self.target, progress=self._on_progress)
            self.transfer_finished.emit(result)
        except Exception as e:
            logger.log("GUI", f"Excepción en hilo de transferencia: {str(e)}")
            self.transfer_error.emit(str(e))
