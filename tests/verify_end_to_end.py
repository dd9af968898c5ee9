import os
import shutil
import socket
import sys
import tempfile
import threading
import unittest

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.config import ClientConfig, ServerConfig
from core.logger import logger
from client.file_client import FileClient
from server.network_server import NetworkServer


class TestClientServer(unittest.TestCase):
    def setUp(self):
        logger.configure(log_dir=None, console=False)
        self.base_dir = tempfile.mkdtemp()
        self.shared_dir = os.path.join(self.base_dir, "shared_files")
        self.upload_dir = os.path.join(self.base_dir, "uploads")
        self.download_dir = os.path.join(self.base_dir, "downloads")

        self.server = NetworkServer(ServerConfig(
            host="127.0.0.1", port=0, pool_size=4, queue_size=8,
            shared_dir=self.shared_dir, upload_dir=self.upload_dir,
        ))
        self.listener = self.server.start_in_background()
        self.client = FileClient(ClientConfig(host="127.0.0.1", port=self.server.port,
                                              download_dir=self.download_dir))

        with open(os.path.join(self.shared_dir, "report.txt"), "wb") as f:
            f.write(b"hello world")

    def tearDown(self):
        self.server.stop()
        self.listener.join(5)
        shutil.rmtree(self.base_dir, ignore_errors=True)

    def write_local(self, name: str, data: bytes) -> str:
        path = os.path.join(self.base_dir, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def test_download_report(self):
        result = self.client.download_file("report.txt")

        self.assertTrue(result.success)
        self.assertIn("200 OK", result.status_line)
        self.assertEqual(result.bytes_transferred, 11)
        self.assertEqual(result.local_path, os.path.join(self.download_dir, "downloaded_report.txt"))
        with open(result.local_path, "rb") as f:
            self.assertEqual(f.read(), b"hello world")

    def test_download_missing_file(self):
        result = self.client.download_file("missing.txt")

        self.assertFalse(result.success)
        self.assertIn("404", result.status_line)
        self.assertEqual(result.message, "File Not Found")
        self.assertFalse(os.path.exists(os.path.join(self.download_dir, "downloaded_missing.txt")))

    def test_download_name_with_spaces_and_unicode(self):
        with open(os.path.join(self.shared_dir, "año 2026 & más.txt"), "wb") as f:
            f.write(b"contenido")
        result = self.client.download_file("año 2026 & más.txt")
        self.assertTrue(result.success)
        with open(result.local_path, "rb") as f:
            self.assertEqual(f.read(), b"contenido")

    def test_download_reports_progress(self):
        payload = os.urandom(100000)
        with open(os.path.join(self.shared_dir, "big.bin"), "wb") as f:
            f.write(payload)
        calls = []

        result = self.client.download_file("big.bin", progress=lambda done, total: calls.append((done, total)))

        self.assertTrue(result.success)
        self.assertEqual(calls[-1], (len(payload), len(payload)))
        with open(result.local_path, "rb") as f:
            self.assertEqual(f.read(), payload)

    def test_upload_round_trip(self):
        payload = bytes(range(256)) * 1000
        path = self.write_local("data.bin", payload)
        calls = []

        result = self.client.upload_file(path, progress=lambda done, total: calls.append((done, total)))

        self.assertTrue(result.success)
        self.assertTrue(result.remote_name.startswith("upload_"))
        self.assertTrue(result.remote_name.endswith(".bin"))
        self.assertEqual(result.bytes_transferred, len(payload))
        self.assertEqual(calls[-1], (len(payload), len(payload)))
        with open(os.path.join(self.upload_dir, result.remote_name), "rb") as f:
            self.assertEqual(f.read(), payload)

    def test_upload_empty_file(self):
        path = self.write_local("empty.txt", b"")

        result = self.client.upload_file(path)

        self.assertTrue(result.success)
        self.assertIn("(0 bytes)", result.message)
        self.assertEqual(os.path.getsize(os.path.join(self.upload_dir, result.remote_name)), 0)

    def test_upload_missing_local_file(self):
        result = self.client.upload_file(os.path.join(self.base_dir, "nope.txt"))
        self.assertFalse(result.success)
        self.assertEqual(os.listdir(self.upload_dir), [])

    def test_concurrent_downloads(self):
        for i in range(8):
            with open(os.path.join(self.shared_dir, f"file{i}.txt"), "wb") as f:
                f.write(f"contenido {i}".encode() * 1000)

        results = {}

        def download(i):
            results[i] = self.client.download_file(f"file{i}.txt")

        threads = [threading.Thread(target=download, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(10)

        self.assertEqual(len(results), 8)
        for i, result in results.items():
            self.assertTrue(result.success)
            with open(result.local_path, "rb") as f:
                self.assertEqual(f.read(), f"contenido {i}".encode() * 1000)

    def test_bad_client_does_not_stop_server(self):
        with socket.create_connection(("127.0.0.1", self.server.port)) as sock:
            sock.sendall(b"NOT HTTP\r\n\r\n")
            response = sock.recv(1024)
        self.assertTrue(response.startswith(b"HTTP/1.1 400 Bad Request"))

        # Conexión que se cierra sin enviar nada
        socket.create_connection(("127.0.0.1", self.server.port)).close()

        self.assertTrue(self.client.download_file("report.txt").success)

    def test_stop_closes_listener(self):
        self.server.stop()
        self.listener.join(5)
        self.assertFalse(self.listener.is_alive())

        result = self.client.download_file("report.txt")
        self.assertFalse(result.success)


if __name__ == '__main__':
    unittest.main()
