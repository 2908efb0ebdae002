import typing


class UnsetType:
    """
    The type of :py:data:`UNSET`, an out-of-band marker that a flat map may carry
    in place of a value to tell that the key is present but the leaf is not set.
    """

    _singleton: typing.ClassVar[typing.Optional["UnsetType"]] = None

    def __bool__(self):
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __new__(cls) -> "UnsetType":
        if cls._singleton is None:
            cls._singleton = object.__new__(cls)
        return cls._singleton


UNSET = UnsetType()

FlatMap = typing.Mapping[str, typing.Any]
MutableFlatMap = typing.MutableMapping[str, str]
GroupPath = typing.Tuple[str, ...]
