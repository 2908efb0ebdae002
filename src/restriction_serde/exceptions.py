import abc
import typing

from .utils import english_enumerate


class RestrictionSerdeException(Exception, metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class InvalidDeclarationError(RestrictionSerdeException):
    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        self._message = message


class DuplicateKeyError(InvalidDeclarationError):
    keys: typing.Sequence[str]

    def __init__(self, keys: typing.Sequence[str]):
        super().__init__(
            f"flat key{'s' if len(keys) > 1 else ''} {english_enumerate(keys)} declared more than once"
        )
        self.keys = keys


class ReservedValueError(RestrictionSerdeException, ValueError):
    group: str
    name: str
    value: str

    @property
    def message(self) -> str:
        return f'{self.group}.{self.name} cannot be set to the reserved value "{self.value}"'

    def __init__(self, group: str, name: str, value: str):
        self.group = group
        self.name = name
        self.value = value


class InvalidLeafValueError(RestrictionSerdeException, TypeError):
    group: str
    name: str
    value: typing.Any

    @property
    def message(self) -> str:
        return f"{self.group}.{self.name} must be a str or None, got {self.value!r}"

    def __init__(self, group: str, name: str, value: typing.Any):
        self.group = group
        self.name = name
        self.value = value
