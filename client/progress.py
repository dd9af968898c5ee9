import sys


class ProgressBar:
    """Barra de progreso de texto: 'Uploading: [=====>    ] 55%'"""

    def __init__(self, label: str, width: int = 20, stream=None):
        self.label = label
        self.width = width
        self.stream = stream or sys.stdout
        self.drawn = False

    def render(self, done: int, total: int) -> str:
        if total <= 0:
            filled, percent = self.width, 100
        else:
            filled = min(self.width, done * self.width // total)
            percent = min(100, done * 100 // total)

        bar = ""
        for i in range(self.width):
            if i < filled:
                bar += "="
            elif i == filled:
                bar += ">"
            else:
                bar += " "
        return f"{self.label}: [{bar}] {percent}%"

    def __call__(self, done: int, total: int):
        # total desconocido (-1): no se dibuja
        if total < 0:
            return
        self.stream.write("\r" + self.render(done, total))
        self.stream.flush()
        self.drawn = True

    def finish(self):
        if self.drawn:
            self.stream.write("\n")
            self.stream.flush()
