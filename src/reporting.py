import sys
from typing import Optional, Protocol, TextIO


class ProgressReporter(Protocol):
    def start(self, message: str) -> None: ...

    def finish(self, message: str = "done!") -> None: ...

    def line(self, text: str = "") -> None: ...


class ConsoleReporter:
    """Writes "Loading data...done!" style progress lines to a stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def start(self, message: str) -> None:
        print(message, end="", file=self._out(), flush=True)

    def finish(self, message: str = "done!") -> None:
        print(message, file=self._out(), flush=True)

    def line(self, text: str = "") -> None:
        print(text, file=self._out(), flush=True)


class NullReporter:
    def start(self, message: str) -> None:
        pass

    def finish(self, message: str = "done!") -> None:
        pass

    def line(self, text: str = "") -> None:
        pass
