"""Start/stop wrapper around an embedded uvicorn listener.

The listener runs on a background thread so that :meth:`CustomerServer.start`
returns as soon as connections are being accepted. :meth:`CustomerServer.stop`
drains in-flight requests for a bounded window before forcing the listener
closed.
"""

from __future__ import annotations

import enum
import threading
import time
from typing import Callable

import structlog
import uvicorn

from customer_server.config import Settings, get_settings
from customer_server.main import app

logger = structlog.get_logger(__name__)


class State(str, enum.Enum):
    CREATED = "created"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"
    FAILED = "failed"


StateListener = Callable[[State, State], None]


class ServiceStateError(RuntimeError):
    pass


class ServiceStartError(RuntimeError):
    pass


_STARTABLE = {State.CREATED, State.STOPPED}
_POLL_SECONDS = 0.01


class CustomerServer:
    def __init__(
        self,
        port: int | None = None,
        host: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._port = self._settings.port if port is None else port
        self._host = host or self._settings.host
        self._state = State.CREATED
        self._state_lock = threading.RLock()
        self._listeners: list[StateListener] = []
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> State:
        return self._state

    @property
    def port(self) -> int:
        return self._port

    @property
    def host(self) -> str:
        return self._host

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def _transition(self, new_state: State) -> None:
        previous = self._state
        self._state = new_state
        logger.info("service_state_changed", previous=previous.value, current=new_state.value, port=self._port)
        for listener in self._listeners:
            listener(previous, new_state)

    def _build_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            app=app,
            host=self._host,
            port=self._port,
            log_config=None,
            access_log=False,
            server_header=False,
            timeout_graceful_shutdown=int(self._settings.shutdown_timeout_seconds),
        )
        return uvicorn.Server(config)

    def start(self) -> None:
        with self._state_lock:
            if self._state not in _STARTABLE:
                raise ServiceStateError(f"Cannot start service in state {self._state.value}")
            self._transition(State.STARTING)

            logger.info("service_starting", host=self._host, port=self._port)
            server = self._build_server()
            thread = threading.Thread(target=server.run, name=f"customer-server-{self._port}", daemon=True)
            self._server = server
            self._thread = thread
            thread.start()

            deadline = time.monotonic() + self._settings.startup_timeout_seconds
            while not server.started:
                if not thread.is_alive():
                    self._transition(State.FAILED)
                    raise ServiceStartError(f"Listener on port {self._port} exited during startup")
                if time.monotonic() > deadline:
                    server.should_exit = True
                    self._transition(State.FAILED)
                    raise ServiceStartError(f"Listener on port {self._port} did not start in time")
                time.sleep(_POLL_SECONDS)

            self._transition(State.RUNNING)

    def stop(self) -> None:
        with self._state_lock:
            if self._state is not State.RUNNING:
                logger.info("service_stop_ignored", state=self._state.value)
                return
            self._transition(State.STOPPING)

            server = self._server
            thread = self._thread
            if server is None or thread is None:
                raise ServiceStateError("Running service has no listener thread")

            grace = self._settings.shutdown_grace_seconds
            timeout = max(self._settings.shutdown_timeout_seconds, grace)

            server.should_exit = True
            thread.join(grace)
            if thread.is_alive():
                logger.info("service_draining", remaining_seconds=round(timeout - grace, 2))
                thread.join(timeout - grace)
            if thread.is_alive():
                logger.warning("service_force_close")
                server.force_exit = True
                thread.join(grace)

            self._server = None
            self._thread = None
            self._transition(State.STOPPED)
