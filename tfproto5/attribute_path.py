"""Paths pointing into aggregate Terraform values, and walking them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Optional, Union

__all__ = [
    "AttributePath",
    "AttributePathStep",
    "AttributeName",
    "ElementKeyString",
    "ElementKeyInt",
    "ElementKeyValue",
    "AttributePathError",
    "NotAttributePathStepperError",
    "InvalidStepError",
    "AttributePathStepper",
    "walk_attribute_path",
]


@dataclass(frozen=True)
class AttributeName:
    """Step selecting an attribute by name."""

    name: str


@dataclass(frozen=True)
class ElementKeyString:
    """Step selecting an element by a string key."""

    key: str


@dataclass(frozen=True)
class ElementKeyInt:
    """Step selecting an element by an integer key."""

    key: int


@dataclass(frozen=True)
class ElementKeyValue:
    """Step selecting an element by using the element itself as the key."""

    key: Any


AttributePathStep = Union[AttributeName, ElementKeyString, ElementKeyInt, ElementKeyValue]


@dataclass
class AttributePath:
    """A sequence of steps leading from the root of a value to a nested value."""

    steps: List[AttributePathStep] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.steps = list(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[AttributePathStep]:
        return iter(self.steps)

    def new_error(self, message: Union[str, BaseException]) -> "AttributePathError":
        """Return an error tied to the value this path points to."""
        err = AttributePathError(str(message), self)
        if isinstance(message, BaseException):
            err.__cause__ = message
        return err

    def with_attribute_name(self, name: str) -> None:
        """Append an attribute-name step."""
        self.steps.append(AttributeName(name))

    def with_element_key_string(self, key: str) -> None:
        """Append a string element-key step."""
        self.steps.append(ElementKeyString(key))

    def with_element_key_int(self, key: int) -> None:
        """Append an integer element-key step."""
        self.steps.append(ElementKeyInt(key))

    def with_element_key_value(self, key: Any) -> None:
        """Append a value element-key step."""
        self.steps.append(ElementKeyValue(key))

    def without_last_step(self) -> None:
        """Remove the last step, whatever kind it is."""
        self.steps.pop()


class AttributePathError(Exception):
    """An error associated with the value an attribute path points to."""

    def __init__(self, message: str, path: Optional[AttributePath] = None) -> None:
        super().__init__(message)
        self.path = AttributePath(path.steps if path is not None else ())


class NotAttributePathStepperError(AttributePathError):
    """Raised when a value along the path cannot be stepped into."""

    def __init__(
        self,
        message: str = "doesn't fill tftypes.AttributePathStepper interface",
        path: Optional[AttributePath] = None,
    ) -> None:
        super().__init__(message, path)


class InvalidStepError(AttributePathError):
    """Raised when a step cannot be applied to the value it is applied to."""

    def __init__(
        self,
        message: str = "step cannot be applied to this value",
        path: Optional[AttributePath] = None,
    ) -> None:
        super().__init__(message, path)


class AttributePathStepper(ABC):
    """A value that knows how to apply a single path step to itself.

    Any object with an ``apply_attribute_path_step`` method counts as one.
    """

    @abstractmethod
    def apply_attribute_path_step(self, step: AttributePathStep) -> Any:
        """Return the attribute or element the step refers to.

        Raise :class:`InvalidStepError` if it does not exist.
        """

    @classmethod
    def __subclasshook__(cls, subclass: type) -> Any:
        if cls is AttributePathStepper:
            if callable(getattr(subclass, "apply_attribute_path_step", None)):
                return True
        return NotImplemented


class _MappingStepper(AttributePathStepper):
    def __init__(self, mapping: Mapping) -> None:
        self._mapping = mapping

    def apply_attribute_path_step(self, step: AttributePathStep) -> Any:
        if isinstance(step, AttributeName):
            key = step.name
        elif isinstance(step, ElementKeyString):
            key = step.key
        else:
            raise InvalidStepError()
        try:
            return self._mapping[key]
        except KeyError:
            raise InvalidStepError() from None


class _SequenceStepper(AttributePathStepper):
    def __init__(self, items: Union[list, tuple]) -> None:
        self._items = items

    def apply_attribute_path_step(self, step: AttributePathStep) -> Any:
        if not isinstance(step, ElementKeyInt):
            raise InvalidStepError()
        if not 0 <= step.key < len(self._items):
            raise InvalidStepError()
        return self._items[step.key]


def _stepper_for(value: Any) -> Optional[AttributePathStepper]:
    if isinstance(value, AttributePathStepper):
        return value
    if isinstance(value, Mapping):
        return _MappingStepper(value)
    if isinstance(value, (list, tuple)):
        return _SequenceStepper(value)
    return None


def walk_attribute_path(value: Any, path: Union[AttributePath, Iterable[AttributePathStep]]) -> Any:
    """Return the value ``path`` points to, starting from ``value``.

    Mappings and lists are supported directly; other values must implement
    :class:`AttributePathStepper`. On failure the raised error's ``path``
    holds the steps that remained, starting with the one that failed.
    """
    steps = list(path.steps if isinstance(path, AttributePath) else path)
    current = value
    for index, step in enumerate(steps):
        remaining = AttributePath(steps[index:])
        stepper = _stepper_for(current)
        if stepper is None:
            raise NotAttributePathStepperError(path=remaining)
        try:
            current = stepper.apply_attribute_path_step(step)
        except InvalidStepError as err:
            raise InvalidStepError(str(err), remaining) from err
    return current