import signal
import sys
from core.config import ServerConfig, parse_address_args
from core.logger import logger
from server.network_server import NetworkServer

class ServerManager:
    def __init__(self, config: ServerConfig):
        self.config = config
        self.server = None
        self.setup_signal_handlers()

    def setup_signal_handlers(self):
        """Configura manejadores de señales para shutdown graceful"""
        def signal_handler(sig, frame):
            logger.log("SYSTEM", f"Recibida señal {sig}. Deteniendo servidor...")
            if self.server:
                self.server.stop()
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)  # Ctrl+C
        signal.signal(signal.SIGTERM, signal_handler) # kill command

    def run(self):
        """Ejecuta el servidor"""
        logger.log("SYSTEM", "Iniciando servidor HTTP de archivos...")
        logger.log("SYSTEM", "Presiona Ctrl+C para detener el servidor")

        try:
            self.server = NetworkServer(self.config)
            self.server.start()
        except OSError as e:
            logger.log("SYSTEM", f"No se pudo iniciar el servidor: {e}")
            return 1
        return 0

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        host, port = parse_address_args(argv)
    except ValueError as e:
        print(f"Argumentos inválidos: {e}")
        print("Uso: python server_main.py [host] [puerto]")
        return 1

    server_manager = ServerManager(ServerConfig(host=host, port=port))
    return server_manager.run()

if __name__ == "__main__":
    sys.exit(main())
