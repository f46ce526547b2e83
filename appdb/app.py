"""QCoreApplication subclass owning the appdb for the daemon's lifetime.

Holds the org.ladish.appdb name on the session bus until SIGINT or
SIGTERM ends the event loop.
"""

from __future__ import annotations

import signal

from PyQt6.QtCore import QCoreApplication, QLockFile, QStandardPaths, QTimer
from PyQt6.QtDBus import QDBusConnection

from appdb import __app_name__, __version__
from appdb.core.appdb import AppDB
from appdb.core.config import DBUS_SERVICE_NAME, Config
from appdb.core.logger import get_logger

_log = get_logger("daemon")

TERM_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class AppDBDaemon(QCoreApplication):
    """Main application for the appdb daemon."""

    def __init__(self, argv: list[str], db: AppDB, config: Config | None = None) -> None:
        super().__init__(argv)
        self.setApplicationName(__app_name__)
        self.setApplicationVersion(__version__)

        self.db = db
        self.config = config or Config()
        self.quit_requested = False
        self._bus: QDBusConnection | None = None
        self._lock: QLockFile | None = None

        # Python signal handlers only run while the interpreter has control,
        # so wake it up periodically.
        self._tick = QTimer(self)
        self._tick.setInterval(int(self.config.get("dispatch_interval_ms")))
        self._tick.timeout.connect(lambda: None)

    # ── Lock file for single instance ──
    def acquire_lock(self) -> bool:
        tmp = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.TempLocation)
        self._lock = QLockFile(f"{tmp}/{__app_name__}.lock")
        return self._lock.tryLock(100)

    # ── Session bus ──
    def connect_bus(self) -> bool:
        bus = QDBusConnection.sessionBus()
        if not bus.isConnected():
            _log.error("Failed to get bus: %s", bus.lastError().message())
            return False

        _log.info('Connected to local session bus, unique name is "%s"', bus.baseService())

        if not bus.registerService(DBUS_SERVICE_NAME):
            _log.error(
                "Failed to acquire bus name %s: %s",
                DBUS_SERVICE_NAME,
                bus.lastError().message() or "name already exists",
            )
            return False

        self._bus = bus
        return True

    def disconnect_bus(self) -> None:
        if self._bus is not None:
            self._bus.unregisterService(DBUS_SERVICE_NAME)
            self._bus = None

    # ── Signals ──
    def install_signal_handlers(self) -> None:
        for signum in TERM_SIGNALS:
            # background jobs start with SIGINT ignored
            if signum == signal.SIGINT and signal.getsignal(signum) is signal.SIG_IGN:
                continue
            signal.signal(signum, self.request_quit)
        self._tick.start()

    def request_quit(self, signum: int, frame=None) -> None:
        _log.info("Caught signal %d (%s), terminating", signum, signal.strsignal(signum))
        self.quit_requested = True
        self.quit()

    def run(self) -> int:
        """Serve until a termination signal arrives."""
        self.install_signal_handlers()
        _log.info("Serving %d applications as %s", len(self.db), DBUS_SERVICE_NAME)
        try:
            return self.exec()
        finally:
            self._tick.stop()
            self.disconnect_bus()
