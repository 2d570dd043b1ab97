"""Modified Bessel functions of the first kind, integer orders.

Thin adapter over :mod:`scipy.special` that turns silent overflow (``inf``) and
invalid arguments (``nan``) into :class:`~circdist.errors.BesselProviderError`.
All functions are stateless and safe to call concurrently.
"""

import numpy as np
from scipy.special import i0, i0e, iv, ive

from .errors import BesselProviderError, InvalidParameterError

__all__ = ["bessel_i_sequence", "bessel_i0", "bessel_ratios"]


def _check_argument(kappa) -> float:
    try:
        kappa = float(kappa)
    except (TypeError, ValueError) as err:
        raise BesselProviderError(f"Bessel argument must be a real scalar, got {kappa!r}.") from err
    if np.isnan(kappa) or kappa < 0.0:
        raise BesselProviderError(f"Bessel argument must be non-negative, got {kappa}.")
    return kappa


def _check_order_count(n_terms) -> int:
    if isinstance(n_terms, bool) or not isinstance(n_terms, (int, np.integer)):
        raise InvalidParameterError("`n_terms` must be an integer.")
    if n_terms < 1:
        raise InvalidParameterError("`n_terms` must be a positive integer.")
    return int(n_terms)


def bessel_i_sequence(n_terms: int, kappa: float, scaled: bool = False) -> np.ndarray:
    r"""
    Modified Bessel functions $I_1(\kappa), \dots, I_N(\kappa)$.

    Parameters
    ----------
    n_terms : int
        Highest order $N$ (>= 1).
    kappa : float
        Argument (>= 0).
    scaled : bool, optional
        Return $e^{-\kappa} I_j(\kappa)$ instead, which stays finite for large
        arguments. Default is False.

    Returns
    -------
    values : np.ndarray (n_terms,)
        Entry ``j - 1`` holds the order-``j`` value.

    Raises
    ------
    BesselProviderError
        If ``kappa`` is invalid or any value is not finite.
    """
    n_terms = _check_order_count(n_terms)
    kappa = _check_argument(kappa)

    orders = np.arange(1, n_terms + 1, dtype=float)
    values = ive(orders, kappa) if scaled else iv(orders, kappa)
    if not np.all(np.isfinite(values)):
        raise BesselProviderError(
            f"I_j({kappa}) overflowed for orders 1..{n_terms}; use scaled values."
        )
    return values


def bessel_i0(kappa: float, scaled: bool = False) -> float:
    r"""$I_0(\kappa)$, or $e^{-\kappa} I_0(\kappa)$ when ``scaled`` is True."""
    kappa = _check_argument(kappa)
    value = float(i0e(kappa) if scaled else i0(kappa))
    if not np.isfinite(value) or value <= 0.0:
        raise BesselProviderError(f"I_0({kappa}) is not representable (got {value}).")
    return value


def bessel_ratios(n_terms: int, kappa: float) -> np.ndarray:
    r"""
    Ratios $I_j(\kappa) / I_0(\kappa)$ for $j = 1, \dots, N$.

    Both numerator and denominator are taken in exponentially scaled form,
    so the common factor $e^{\kappa}$ cancels before it can overflow.

    Raises
    ------
    BesselProviderError
        If the scaled values cannot be computed.
    """
    numerators = bessel_i_sequence(n_terms, kappa, scaled=True)
    denominator = bessel_i0(kappa, scaled=True)
    return numerators / denominator
