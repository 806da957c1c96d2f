"""Abstract host interface the automation service drives.

A host owns one or more web view surfaces, each addressed by a label.
The service only needs two things from it: finding a surface by label and
handing that surface a script to run. How the script is evaluated, and on
which thread, is the host's business.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping

logger = logging.getLogger(__name__)


class DirectiveDispatchError(Exception):
    """Raised when a surface cannot accept a directive."""


class Surface(ABC):
    """A single web view the service can send directives to.

    Example usage::

        surface = host.get_surface("main")
        surface.send_directive("console.log('hello')")
    """

    def __init__(self, label: str) -> None:
        self._label = label

    @property
    def label(self) -> str:
        return self._label

    @abstractmethod
    def send_directive(self, script: str) -> None:
        """Hand ``script`` to the web view for asynchronous evaluation.

        Implementations must not wait for any promise the script creates;
        the result of the directive is never read back through this call.

        Raises:
            DirectiveDispatchError: If the web view refused the script or
                is no longer available.
        """
        ...


class AutomationHost(ABC):
    """Resolves labelled surfaces for the automation service."""

    @abstractmethod
    def get_surface(self, label: str) -> Surface | None:
        """Return the surface called ``label``, or None if it does not exist."""
        ...


class StaticHost(AutomationHost):
    """Host over a fixed mapping of labels to surfaces."""

    def __init__(self, surfaces: Mapping[str, Surface] | None = None) -> None:
        self._surfaces: dict[str, Surface] = dict(surfaces or {})

    def add_surface(self, surface: Surface) -> None:
        self._surfaces[surface.label] = surface
        logger.debug("Registered surface %s", surface.label)

    def remove_surface(self, label: str) -> None:
        self._surfaces.pop(label, None)

    def get_surface(self, label: str) -> Surface | None:
        return self._surfaces.get(label)
