# worker_pool.py
import queue
import threading
from typing import Callable, List

from core.logger import logger

_STOP = object()


class WorkerPool:
    """
    Conjunto fijo de hilos que toman tareas de una cola acotada.
    Con la cola llena, submit() bloquea a quien envía (el bucle de accept).
    """

    def __init__(self, size: int = 10, queue_size: int = 50, name: str = "Worker"):
        if size < 1:
            raise ValueError("El pool necesita al menos un worker")
        self.size = size
        self.tasks = queue.Queue(maxsize=queue_size)
        self.threads: List[threading.Thread] = []
        self.name = name
        self.accepting = False
        self.lock = threading.Lock()

    def start(self):
        """Inicia los hilos del pool"""
        with self.lock:
            if self.accepting:
                return
            self.accepting = True
            for i in range(self.size):
                thread = threading.Thread(target=self._worker_thread, name=f"{self.name}-{i + 1}", daemon=True)
                thread.start()
                self.threads.append(thread)
        logger.log("POOL", f"Pool iniciado con {self.size} workers")

    def submit(self, task: Callable, *args, timeout=None):
        """
        Encola una tarea. Bloquea mientras la cola esté llena;
        con timeout lanza queue.Full si no se liberó espacio a tiempo.
        """
        if not self.accepting:
            raise RuntimeError("El pool no acepta tareas")
        self.tasks.put((task, args), block=True, timeout=timeout)

    def _worker_thread(self):
        """Procesa tareas hasta recibir la marca de parada"""
        thread_name = threading.current_thread().name
        while True:
            item = self.tasks.get()
            try:
                if item is _STOP:
                    return
                task, args = item
                task(*args)
            except Exception as e:
                logger.log("POOL", f"[{thread_name}] Error en tarea: {e}")
            finally:
                self.tasks.task_done()

    def shutdown(self, wait: bool = True):
        """
        Deja de aceptar tareas. Las tareas ya encoladas y en curso terminan;
        las marcas de parada van detrás de ellas en la cola.
        """
        with self.lock:
            if not self.accepting:
                return
            self.accepting = False
            threads = list(self.threads)

        for _ in threads:
            self.tasks.put(_STOP)

        if wait:
            for thread in threads:
                thread.join()
        with self.lock:
            self.threads = []
        logger.log("POOL", "Pool detenido")
