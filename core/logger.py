# logger.py
import datetime
import os
import threading
from core.config import LOG_FOLDER

class Logger:
    _instance = None
    _ui_callback = None

    MAX_ENTRIES = 1000

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Inicializa el logger"""
        self._log_entries = []
        self._lock = threading.Lock()
        self.log_dir = LOG_FOLDER
        self.console = True

    def configure(self, log_dir=LOG_FOLDER, console=True):
        """Cambia el destino de los logs; log_dir=None desactiva el archivo"""
        with self._lock:
            self.log_dir = log_dir
            self.console = console

    def _get_log_file(self):
        """Obtiene el archivo log para la fecha actual"""
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d")
        return os.path.join(self.log_dir, f"{timestamp}.log")

    def set_ui_callback(self, callback):
        """Establece el callback para enviar logs a la UI"""
        self._ui_callback = callback

    def log(self, event_type, message):
        """Registra un evento en el log"""
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_entry = f"[{timestamp}] [{event_type}] {message}"

        # Varios workers escriben a la vez
        with self._lock:
            self._log_entries.append(log_entry)
            if len(self._log_entries) > self.MAX_ENTRIES:
                del self._log_entries[0]

            if self.log_dir:
                os.makedirs(self.log_dir, exist_ok=True)
                with open(self._get_log_file(), 'a', encoding='utf-8') as f:
                    f.write(log_entry + '\n')

            if self.console:
                print(log_entry)

        # Llamar callback de UI si está configurado
        callback = self._ui_callback
        if callback:
            callback(log_entry)

    def get_recent_logs(self, count=10):
        """Obtiene los logs más recientes"""
        with self._lock:
            return self._log_entries[-count:] if self._log_entries else []

    def clear_logs(self):
        """Limpia los logs"""
        with self._lock:
            self._log_entries.clear()

# Crear instancia global
logger = Logger()
