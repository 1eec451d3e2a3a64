from __future__ import annotations

import logging
from typing import Dict

LOGGER_NAME = "enigmasim"

COMPONENTS = ("stepping", "plugboard", "rotor", "reflector", "encipher")


class Tracer:
    """
    Per-component switches in front of a stdlib logger.

    A Machine receives one of these explicitly; nothing here is process-wide
    except the logger itself. Messages go out at DEBUG level.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.enabled = True
        self.components: Dict[str, bool] = {c: False for c in COMPONENTS}

    @classmethod
    def verbose(cls, *, logger: logging.Logger | None = None) -> "Tracer":
        tracer = cls(logger=logger)
        tracer.enable(*COMPONENTS)
        return tracer

    # ── logging API ──────────────────────────────────────────────
    def active(self, component: str) -> bool:
        return self.enabled and self.components.get(component, False)

    def log(self, component: str, message: str, *args: object) -> None:
        if self.active(component):
            self.logger.debug("[%s] " + message, component.upper(), *args)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = False

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once without losing the map."""
        self.enabled = state

    def status(self) -> Dict[str, bool]:
        return self.components.copy()

    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Tracer enabled={self.enabled} active={active}>"


def configure_logging(verbose: bool = False) -> None:
    """Send simulator logs to stderr. Only the CLI calls this."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] [%(name)s]: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
