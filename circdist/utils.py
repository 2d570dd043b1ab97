from typing import Union

import numpy as np

from .bessel import bessel_ratios


def angmod(
    rad: Union[np.ndarray, float, int], bounds: tuple = (0.0, 2 * np.pi)
) -> Union[np.ndarray, float]:
    """
    Reduce angles into the half-open range ``[bounds[0], bounds[1])``.

    Parameters
    ----------
    rad : Union[np.ndarray, float, int]
        An angle or array of angles in radians.
    bounds : tuple, optional
        Two values (min, max) defining the target range. Default is [0, 2π).

    Returns
    -------
    Union[np.ndarray, float]
        The reduced angle(s).
    """
    if len(bounds) != 2 or bounds[0] >= bounds[1]:
        raise ValueError(
            "bounds must be a list or tuple with two values [min, max] where min < max."
        )

    lower, upper = bounds
    span = upper - lower
    result = np.mod(np.asarray(rad, dtype=float) - lower, span) + lower
    # np.mod can round up to exactly `span` for tiny negative inputs
    result = np.where(result >= upper, lower, result)

    if result.ndim == 0:
        return float(result)
    return result


def A1(kappa: float) -> float:
    r"""Mean resultant length of a von Mises law, $I_1(\kappa) / I_0(\kappa)$."""
    return float(bessel_ratios(1, kappa)[0])
