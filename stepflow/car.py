"""Business objects of the drivers' log sample application."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from stepflow.payload import BinaryProcessingData

_log = logging.getLogger(__name__)


class Database(Protocol):
    def is_open(self) -> bool: ...


class BusinessObject(BinaryProcessingData):
    """Base class for domain objects that travel through pipelines as binary payloads."""


@dataclass
class Car(BusinessObject):
    """A car with its model and licence plate."""

    model: str
    license_plate: str

    def write_to_database(self, db: Database) -> bool:
        """Report whether the car was stored in ``db``.

        A closed database is never written to. No table layout is defined
        for cars, so an open database stores nothing either and the result
        is False in both cases.
        """
        if not db.is_open():
            _log.debug("database is closed; car %r was not written", self.license_plate)
            return False
        stored = False
        _log.debug(
            "no table layout for cars; car %r stored: %s", self.license_plate, stored
        )
        return stored