from importlib import metadata as _metadata

from .distributions import VM_CDF_TERMS, VonMises, vonmises
from .errors import (
    BesselProviderError,
    CircdistError,
    DomainError,
    InvalidParameterError,
)

try:  # Prefer installed package metadata
    __version__ = _metadata.version("circdist")
except _metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.0.0"

__all__ = [
    "VonMises",
    "vonmises",
    "VM_CDF_TERMS",
    "CircdistError",
    "InvalidParameterError",
    "DomainError",
    "BesselProviderError",
    "__version__",
]
