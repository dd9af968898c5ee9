import sys
from core.config import ClientConfig, parse_address_args
from core.logger import logger
from client.file_client import FileClient
from client.console import ConsoleClient

def run_gui(client: FileClient):
    from PyQt6.QtWidgets import QApplication
    from client.gui.app import FileTransferGUI

    app = QApplication(sys.argv)
    window = FileTransferGUI(client)
    window.show()
    return app.exec()

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    use_gui = "--gui" in argv
    positional = [arg for arg in argv if arg != "--gui"]

    try:
        host, port = parse_address_args(positional)
    except ValueError as e:
        print(f"Argumentos inválidos: {e}")
        print("Uso: python client_main.py [host] [puerto] [--gui]")
        return 1

    if not use_gui:
        # En consola los logs van al archivo; la salida es el menú
        logger.configure(console=False)

    client = FileClient(ClientConfig(host=host, port=port))
    if use_gui:
        return run_gui(client)

    ConsoleClient(client).run()
    return 0

if __name__ == "__main__":
    sys.exit(main())
