from .formatting import english_enumerate  # noqa
from .types import UNSET, UnsetType  # noqa
