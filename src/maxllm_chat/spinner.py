import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager

_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"


class Spinner:
    """Loading indicator drawn on the current line while a reply is pending."""

    def __init__(self, prefix: str = "", label: str = " Thinking..."):
        self._prefix = prefix
        self._label = label
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._stop.is_set():
            return
        self._stop.set()
        if self._thread:
            self._thread.join()
        blank = " " * (len(self._prefix) + 1 + len(self._label))
        sys.stdout.write("\r" + blank + "\r")
        sys.stdout.flush()

    def _run(self) -> None:
        i = 0
        try:
            while not self._stop.is_set():
                sys.stdout.write("\r" + self._prefix + _FRAMES[i % len(_FRAMES)] + self._label)
                sys.stdout.flush()
                self._stop.wait(0.08)
                i += 1
        except (UnicodeEncodeError, OSError):
            pass  # terminal cannot draw the frames


@contextmanager
def loading(*, prefix: str = "", enabled: bool = True) -> Iterator[None]:
    if not enabled:
        yield
        return
    spinner = Spinner(prefix=prefix)
    spinner.start()
    try:
        yield
    finally:
        spinner.stop()
