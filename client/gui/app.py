from PyQt6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
                            QPushButton, QLineEdit, QProgressBar, QListWidget,
                            QFileDialog, QMessageBox)
from PyQt6.QtCore import pyqtSignal
from client.file_client import FileClient
from client.gui.threads import TransferThread
from core.logger import logger

class FileTransferGUI(QMainWindow):
    log_received = pyqtSignal(str)

    def __init__(self, client: FileClient):
        super().__init__()
        self.client = client
        self.transfer_thread = None
        self.init_ui()
        self.setup_logger_connection()

    def init_ui(self):
        """Inicializa la interfaz de usuario"""
        self.setWindowTitle(f"HTTP File Client - {self.client.host_server}:{self.client.port_server}")
        self.setGeometry(100, 100, 700, 450)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        # Fila de subida
        upload_row = QHBoxLayout()
        upload_row.addWidget(QLabel("Subir archivo local:"))
        self.btn_upload = QPushButton("Seleccionar y subir...")
        self.btn_upload.clicked.connect(self.choose_and_upload)
        upload_row.addWidget(self.btn_upload)
        upload_row.addStretch()
        layout.addLayout(upload_row)

        # Fila de descarga
        download_row = QHBoxLayout()
        download_row.addWidget(QLabel("Archivo a descargar:"))
        self.download_input = QLineEdit()
        self.download_input.setPlaceholderText("nombre.ext")
        download_row.addWidget(self.download_input)
        self.btn_download = QPushButton("Descargar")
        self.btn_download.clicked.connect(self.start_download)
        download_row.addWidget(self.btn_download)
        layout.addLayout(download_row)

        # Barra de progreso
        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setVisible(False)
        layout.addWidget(self.progress_bar)

        # Área de logs
        self.log_area = QListWidget()
        layout.addWidget(self.log_area)

    def setup_logger_connection(self):
        """Conecta el logger al área de logs; el callback llega desde otros hilos"""
        self.log_received.connect(self.add_log_to_ui)
        logger.set_ui_callback(self.log_received.emit)

    def add_log_to_ui(self, log_entry):
        self.log_area.addItem(log_entry)
        # Auto-scroll al final
        self.log_area.scrollToBottom()

    def choose_and_upload(self):
        file_path, _ = QFileDialog.getOpenFileName(self, "Seleccionar archivo a subir")
        if file_path:
            self.start_transfer("upload", file_path)

    def start_download(self):
        filename = self.download_input.text().strip()
        if not filename:
            QMessageBox.warning(self, "Descarga", "Ingrese el nombre del archivo")
            return
        self.start_transfer("download", filename)

    def start_transfer(self, operation: str, target: str):
        self.set_buttons_enabled(False)
        self.progress_bar.setValue(0)
        self.progress_bar.setVisible(True)

        self.transfer_thread = TransferThread(self.client, operation, target)
        self.transfer_thread.progress_changed.connect(self.progress_bar.setValue)
        self.transfer_thread.transfer_finished.connect(self.on_transfer_finished)
        self.transfer_thread.transfer_error.connect(self.on_transfer_error)
        self.transfer_thread.start()

    def on_transfer_finished(self, result):
        self.set_buttons_enabled(True)
        self.progress_bar.setVisible(False)
        if result.success:
            QMessageBox.information(self, "Transferencia", result.message)
        else:
            QMessageBox.warning(self, "Transferencia fallida", result.message or "Error desconocido")

    def on_transfer_error(self, error):
        self.set_buttons_enabled(True)
        self.progress_bar.setVisible(False)
        QMessageBox.critical(self, "Error", error)

    def set_buttons_enabled(self, enabled: bool):
        self.btn_upload.setEnabled(enabled)
        self.btn_download.setEnabled(enabled)

    def closeEvent(self, event):
        logger.set_ui_callback(None)
        if self.transfer_thread and self.transfer_thread.isRunning():
            self.transfer_thread.wait()
        super().closeEvent(event)
