import threading
import time
from types import SimpleNamespace

BASE = "http://localhost:3000"


def page(*hrefs):
    anchors = "".join(f'<a href="{href}">link</a>' for href in hrefs)
    return f"<html><body>{anchors}</body></html>"


class FakeSession:
    """
    Stands in for requests.Session; unknown URLs answer 404.

    A threading.Event as a page value makes that request hang until the event is set.
    delay slows every request down so overlapping requests can be counted.
    """

    def __init__(self, pages, delay=0.0):
        self.pages = {BASE + path: value for path, value in pages.items()}
        self.headers = {}
        self.calls = []
        self.delay = delay
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def get(self, url, timeout=None):
        with self._lock:
            self.calls.append(url)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            value = self.pages.get(url)
            if self.delay:
                time.sleep(self.delay)
            if isinstance(value, threading.Event):
                value.wait()
                value = page()
            if hasattr(value, "status_code"):
                return value
            if isinstance(value, BaseException):
                raise value
            if value is None:
                return SimpleNamespace(status_code=404, text="not found")
            if isinstance(value, int):
                return SimpleNamespace(status_code=value, text="")
            return SimpleNamespace(status_code=200, text=value)
        finally:
            with self._lock:
                self.active -= 1

    def paths(self):
        return [url[len(BASE):] for url in self.calls]


class UndecodableResponse:
    status_code = 200

    @property
    def text(self):
        raise LookupError("unknown encoding: x-bogus")
