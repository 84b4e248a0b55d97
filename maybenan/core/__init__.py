"""NaN-aware partition and fold primitives."""

from .columns import to_maybe_nan
from .config import ENGINES, get_engine, set_engine, use_engine
from .families import (
    FLOAT32,
    FLOAT64,
    OPTIONAL,
    FloatFamily,
    MaybeNan,
    OptionalFamily,
    family_for,
    from_not_nan,
    from_not_nan_opt,
    from_not_nan_ref_opt,
    is_nan,
    optional_family,
    remove_nan_mut,
    try_as_not_nan,
)
from .fold import count_not_nan, fold_skipnan, max_skipnan, min_skipnan
from .lanes import remove_nan_mut_lanes
from .not_none import NotNone
from .notnan import N32, N64
from .views import NotNanView

__all__ = [
    "ENGINES",
    "FLOAT32",
    "FLOAT64",
    "N32",
    "N64",
    "OPTIONAL",
    "FloatFamily",
    "MaybeNan",
    "NotNanView",
    "NotNone",
    "OptionalFamily",
    "count_not_nan",
    "family_for",
    "fold_skipnan",
    "from_not_nan",
    "from_not_nan_opt",
    "from_not_nan_ref_opt",
    "get_engine",
    "is_nan",
    "max_skipnan",
    "min_skipnan",
    "optional_family",
    "remove_nan_mut",
    "remove_nan_mut_lanes",
    "set_engine",
    "to_maybe_nan",
    "try_as_not_nan",
    "use_engine",
]
