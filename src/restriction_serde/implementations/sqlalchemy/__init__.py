from .core import (  # noqa
    RestrictionType,
    dump_restriction,
    load_restriction,
    restriction_columns,
)
