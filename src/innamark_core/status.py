"""Innamark diagnostics - events, accumulated status and results.

Every operation reports what happened as a Status holding any number of
events. An event is rendered as "<Type> (<source>): <message>", which is a
stable, testable string contract.
"""
from __future__ import annotations

import warnings
from enum import IntEnum
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Severity(IntEnum):
    SUCCESS = 0
    WARNING = 1
    ERROR = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


class WatermarkError(ValueError):
    """Raised by Result.unwrap() when the status is an error."""

    def __init__(self, status: Status):
        super().__init__(str(status))
        self.status = status


class WatermarkWarning(UserWarning):
    """Category used to surface warning events through the warnings module."""


class Event:
    """Something that happened during an operation.

    Subclasses of WarningEvent and ErrorEvent must override message().
    SuccessEvent may be used directly when no message is needed.
    """

    severity: Severity = Severity.SUCCESS

    def __init__(self, source: str | None = None):
        self.source = source

    def message(self) -> str | None:
        return None

    @property
    def has_custom_message(self) -> bool:
        return self.message() is not None

    def into(self) -> Status:
        return Status(self)

    def into_result(self, value: T | None = None) -> Result[T]:
        return Result(self.into(), value)

    def __str__(self) -> str:
        text = self.severity.label
        if self.source is not None:
            text += f" ({self.source})"
        msg = self.message()
        if msg is not None:
            text += f": {msg}"
        return text

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


class SuccessEvent(Event):
    severity = Severity.SUCCESS


class WarningEvent(Event):
    severity = Severity.WARNING

    def __init__(self, source: str):
        super().__init__(source)

    def message(self) -> str:
        raise NotImplementedError


class ErrorEvent(Event):
    severity = Severity.ERROR

    def __init__(self, source: str):
        super().__init__(source)

    def message(self) -> str:
        raise NotImplementedError


class Status:
    """Outcome of an operation that can produce warnings and errors.

    The severity is the highest severity of all added events unless an
    event or status is added with override_severity=True.
    """

    def __init__(self, event: Event | None = None):
        self._events: list[Event] = []
        self.severity = Severity.SUCCESS
        if event is not None:
            self.add_event(event)

    @classmethod
    def success(cls) -> Status:
        return cls(SuccessEvent())

    @property
    def is_success(self) -> bool:
        return self.severity == Severity.SUCCESS

    @property
    def is_warning(self) -> bool:
        return self.severity == Severity.WARNING

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    @property
    def has_custom_message(self) -> bool:
        return any(e.has_custom_message for e in self._events)

    def add_event(self, event: Event, override_severity: bool = False) -> None:
        if override_severity or event.severity > self.severity:
            self.severity = event.severity

        # Events without a message carry no information beyond their severity
        if event.has_custom_message:
            self._events.append(event)

    def append_status(self, other: Status, override_severity: bool = False) -> None:
        for event in other._events:
            self.add_event(event)
        if override_severity or self.severity < other.severity:
            self.severity = other.severity

    def prepend_status(self, other: Status, override_severity: bool = False) -> None:
        if override_severity or self.severity < other.severity:
            self.severity = other.severity
        self._events[0:0] = other._events

    def message(self) -> str:
        """Messages of all events without their type, one per line."""
        if not self._events:
            return self.severity.label
        return "\n".join(str(e.message()) for e in self._events)

    def into(self, value: T | None = None) -> Result[T]:
        return Result(self, value)

    def __str__(self) -> str:
        if not self._events:
            return self.severity.label
        return "\n".join(str(e) for e in self._events)

    def __repr__(self) -> str:
        return f"<Status {self.severity.name} events={len(self._events)}>"


class Result(Generic[T]):
    """A value together with the Status of the operation that produced it.

    Results with a success or warning status are expected to carry a value.
    """

    def __init__(self, status: Status, value: T | None = None):
        self.status = status
        self.value = value

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(Status.success(), value)

    @property
    def has_value(self) -> bool:
        return self.value is not None

    @property
    def is_success(self) -> bool:
        return self.status.is_success

    @property
    def is_warning(self) -> bool:
        return self.status.is_warning

    @property
    def is_error(self) -> bool:
        return self.status.is_error

    @property
    def events(self) -> list[Event]:
        return self.status.events

    def with_value(self, value: U | None) -> Result[U]:
        """New Result sharing this status but carrying value."""
        return Result(self.status, value)

    def append_status(self, status: Status) -> None:
        self.status.append_status(status)

    def prepend_status(self, status: Status) -> None:
        self.status.prepend_status(status)

    def message(self) -> str:
        return self.status.message()

    def unwrap(self) -> T:
        """Return the value, raising on errors and warning on warnings."""
        if self.status.is_error:
            raise WatermarkError(self.status)
        for event in self.status.events:
            if event.severity == Severity.WARNING:
                warnings.warn(str(event), WatermarkWarning, stacklevel=2)
        return self.value

    def __str__(self) -> str:
        return str(self.status)

    def __repr__(self) -> str:
        return f"<Result {self.status.severity.name} value={self.value!r}>"
