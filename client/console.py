import os

from client.file_client import FileClient
from client.progress import ProgressBar


class ConsoleClient:
    """Menú interactivo: subir, descargar o salir"""

    def __init__(self, client: FileClient, input_func=input, output=print, stream=None):
        self.client = client
        self.input = input_func
        self.output = output
        self.stream = stream

    def run(self):
        self.output(f"Servidor: {self.client.host_server}:{self.client.port_server}")
        self.output("")

        while True:
            self.output("Elija una opción:")
            self.output("1. Subir archivo")
            self.output("2. Descargar archivo")
            self.output("3. Salir")
            try:
                choice = self.input("Ingrese su opción (1-3): ").strip()
            except EOFError:
                return

            if choice == "1":
                self.upload()
            elif choice == "2":
                self.download()
            elif choice == "3":
                return
            else:
                self.output("Opción inválida. Ingrese 1, 2 o 3.")
            self.output("")

    def upload(self):
        file_path = self.input("Ruta del archivo a subir: ").strip()
        if not os.path.isfile(file_path):
            self.output("Error: archivo no encontrado o no es un archivo válido.")
            return

        bar = ProgressBar("Uploading", stream=self.stream)
        result = self.client.upload_file(file_path, progress=bar)
        bar.finish()

        self._print_summary(result)
        self.output("Subida exitosa!" if result.success else "Subida fallida!")

    def download(self):
        filename = self.input("Nombre del archivo a descargar: ").strip()

        bar = ProgressBar("Downloading", stream=self.stream)
        result = self.client.download_file(filename, progress=bar)
        bar.finish()

        self._print_summary(result)
        if result.success:
            self.output("Descarga completa!")
            self.output(f"Guardado como: {os.path.basename(result.local_path)}")
            self.output(f"Total de bytes recibidos: {result.bytes_transferred}")
        else:
            self.output("Descarga fallida!")

    def _print_summary(self, result):
        self.output("=== RESPUESTA DEL SERVIDOR ===")
        if result.status_line:
            self.output(f"Estado: {result.status_line}")
        if result.message:
            self.output(f"Mensaje: {result.message}")
        self.output("==============================")
