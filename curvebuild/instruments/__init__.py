"""Index conventions, index securities and concrete indices."""

from .conventions import IborIndexConvention, OvernightIndexConvention
from .indices import Index, IborIndex, OvernightIndex
from .securities import IborIndexSecurity, OvernightIndexSecurity

__all__ = [
    "IborIndexConvention",
    "OvernightIndexConvention",
    "IborIndexSecurity",
    "OvernightIndexSecurity",
    "Index",
    "IborIndex",
    "OvernightIndex",
]
