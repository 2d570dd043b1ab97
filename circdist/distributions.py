import warnings
from dataclasses import dataclass

import numpy as np
from scipy.optimize import brentq

from .bessel import bessel_i0, bessel_ratios
from .errors import DomainError, InvalidParameterError
from .utils import A1, angmod

__all__ = ["VonMises", "vonmises", "VM_CDF_TERMS"]

# Truncation order of the Fourier-Bessel series.
VM_CDF_TERMS = 100
# Largest coefficient I_N / (N I_0) tolerated in the last retained term.
VM_CDF_TAIL_TOL = 1e-12
# Slack on |x - mu| <= pi before an offset counts as outside the period.
VM_DOMAIN_SLACK = 1e-12
VM_PPF_XTOL = 1e-13


def _as_float_array(values, name):
    arr = np.asarray(values, dtype=float)
    if np.any(np.isnan(arr)):
        raise InvalidParameterError(f"`{name}` must not contain NaN.")
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError(f"`{name}` must be finite.")
    return arr


def _series_cdf(d, ratios):
    r"""
    $F = \frac{1}{2} + \frac{1}{2\pi}\left(d + 2\sum_j \frac{I_j}{I_0}\frac{\sin(j d)}{j}\right)$
    """
    flat = d.reshape(-1)
    term_sum = np.zeros_like(flat)
    for j, ratio in enumerate(ratios, start=1):
        term_sum += (ratio / j) * np.sin(j * flat)
    cdf = 0.5 + (flat + 2.0 * term_sum) / (2.0 * np.pi)
    return cdf.reshape(d.shape)


@dataclass(frozen=True)
class VonMises:
    r"""Von Mises Distribution

    $$
    f(\theta) = \frac{e^{\kappa \cos(\theta - \mu)}}{2\pi I_0(\kappa)}
    $$

    Parameters
    ----------
    mu : float
        Mean direction. Any real value; no wraparound is applied.
    kappa : float
        Concentration (kappa > 0). Larger values cluster the mass around `mu`.

    Raises
    ------
    InvalidParameterError
        If `mu` or `kappa` is NaN, or `kappa` is not a finite positive number.

    Methods
    -------
    cdf(x, n_terms=VM_CDF_TERMS, wrap=False)
        Cumulative distribution function.

    sf(x, n_terms=VM_CDF_TERMS, wrap=False)
        Survival function.

    pdf(x), logpdf(x)
        Probability density function and its logarithm.

    ppf(q, n_terms=VM_CDF_TERMS)
        Percent-point function (inverse of CDF).

    rvs(size=None, random_state=None)
        Random variates.

    Examples
    --------
    ```
    from circdist import VonMises
    VonMises(0.0, 4.0).cdf(1.0)
    ```

    References
    ----------
    - Section 4.3.8 of Pewsey et al. (2014)
    - Hill, G. W. (1977). Algorithm 518: Incomplete Bessel function I0.
      The von Mises distribution. ACM TOMS 3(3), 279-284.
    """

    mu: float
    kappa: float

    def __post_init__(self):
        try:
            mu = float(self.mu)
            kappa = float(self.kappa)
        except (TypeError, ValueError) as err:
            raise InvalidParameterError("`mu` and `kappa` must be real scalars.") from err

        if not np.isfinite(mu):
            raise InvalidParameterError(f"`mu` must be finite, got {mu}.")
        if np.isnan(kappa) or kappa <= 0.0:
            raise InvalidParameterError(f"`kappa` must be positive, got {kappa}.")
        if not np.isfinite(kappa):
            raise InvalidParameterError("`kappa` must be finite.")

        object.__setattr__(self, "mu", mu)
        object.__setattr__(self, "kappa", kappa)

    # ------------------------------------------------------------------
    # Domain
    # ------------------------------------------------------------------
    def min(self) -> float:
        """Lower end of the principal range, -π."""
        return -np.pi

    def max(self) -> float:
        """Upper end of the principal range, π."""
        return np.pi

    def support(self):
        return self.min(), self.max()

    # ------------------------------------------------------------------
    # Distribution functions
    # ------------------------------------------------------------------
    def _offset(self, x, wrap):
        d = _as_float_array(x, "x") - self.mu
        outside = np.abs(d) > np.pi + VM_DOMAIN_SLACK
        if not np.any(outside):
            return d
        if wrap:
            return np.where(outside, angmod(d, (-np.pi, np.pi)), d)
        raise DomainError(
            f"`x - mu` must lie within [-π, π] (mu={self.mu}); pass wrap=True to reduce it."
        )

    def _cdf_ratios(self, n_terms, stacklevel):
        ratios = bessel_ratios(n_terms, self.kappa)
        tail = ratios[-1] / ratios.size
        if tail > VM_CDF_TAIL_TOL:
            warnings.warn(
                (
                    f"von Mises CDF series truncated at {ratios.size} terms for "
                    f"κ={self.kappa:g}; last coefficient {tail:.1e}. "
                    "Increase `n_terms` for full precision."
                ),
                RuntimeWarning,
                stacklevel=stacklevel,
            )
        return ratios

    def cdf(self, x, *, n_terms: int = VM_CDF_TERMS, wrap: bool = False):
        r"""
        Cumulative distribution function of the Von Mises distribution.

        Evaluated through its Fourier-Bessel series expansion, truncated after
        ``n_terms`` terms:

        $$
        F(\theta) = \frac{1}{2} + \frac{\theta - \mu}{2\pi}
        + \frac{1}{\pi}\sum_{j=1}^{N} \frac{I_j(\kappa)}{I_0(\kappa)\,j}
        \sin\bigl(j(\theta - \mu)\bigr)
        $$

        The probability is accumulated from $\mu - \pi$, so ``cdf(mu) == 0.5``.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the cumulative distribution function.
        n_terms : int, optional
            Truncation order of the series. Default is ``VM_CDF_TERMS`` (100).
        wrap : bool, optional
            Reduce offsets ``x - mu`` beyond ±π into [-π, π) instead of
            raising. Default is False.

        Returns
        -------
        cdf_values : float or np.ndarray
            Cumulative distribution function evaluated at `x`.

        Raises
        ------
        InvalidParameterError
            If `x` contains NaN or infinite values.
        DomainError
            If ``|x - mu| > π`` and `wrap` is False.
        BesselProviderError
            If the Bessel ratios cannot be computed.
        """
        return self._cdf(x, n_terms, wrap, stacklevel=4)

    def _cdf(self, x, n_terms, wrap, stacklevel):
        d = self._offset(x, wrap)
        cdf = _series_cdf(d, self._cdf_ratios(n_terms, stacklevel))
        if cdf.ndim == 0:
            return float(cdf)
        return cdf

    def sf(self, x, *, n_terms: int = VM_CDF_TERMS, wrap: bool = False):
        """Survival function, ``1 - cdf(x)``."""
        return 1.0 - self._cdf(x, n_terms, wrap, stacklevel=4)

    def pdf(self, x):
        r"""
        Probability density function.

        Uses $e^{-\kappa} I_0(\kappa)$ so that large concentrations do not overflow.
        """
        x = np.asarray(x, dtype=float)
        norm = 2.0 * np.pi * bessel_i0(self.kappa, scaled=True)
        pdf = np.exp(self.kappa * (np.cos(x - self.mu) - 1.0)) / norm
        if pdf.ndim == 0:
            return float(pdf)
        return pdf

    def logpdf(self, x):
        x = np.asarray(x, dtype=float)
        lognorm = np.log(2.0 * np.pi * bessel_i0(self.kappa, scaled=True))
        logpdf = self.kappa * (np.cos(x - self.mu) - 1.0) - lognorm
        if logpdf.ndim == 0:
            return float(logpdf)
        return logpdf

    def ppf(self, q, *, n_terms: int = VM_CDF_TERMS):
        """
        Percent-point function (inverse of the CDF) on [mu - π, mu + π].

        Each quantile is bracketed by the period around `mu` and solved with
        Brent's method on the truncated series.

        Parameters
        ----------
        q : array_like
            Probabilities in [0, 1].
        n_terms : int, optional
            Truncation order of the series. Default is ``VM_CDF_TERMS``.

        Returns
        -------
        ppf_values : float or np.ndarray
            Angles whose CDF equals `q`.
        """
        q_arr = _as_float_array(q, "q")
        if np.any((q_arr < 0.0) | (q_arr > 1.0)):
            raise InvalidParameterError("`q` must lie within [0, 1].")

        ratios = self._cdf_ratios(n_terms, stacklevel=3)
        lower, upper = -np.pi, np.pi

        def _objective(d, target):
            return float(_series_cdf(np.asarray(d), ratios)) - target

        def _solve(target):
            # truncation error can push the endpoint values just past 0 or 1
            if _objective(lower, target) >= 0.0:
                return lower
            if _objective(upper, target) <= 0.0:
                return upper
            return brentq(_objective, lower, upper, args=(target,), xtol=VM_PPF_XTOL)

        flat = q_arr.reshape(-1)
        offsets = np.array([_solve(float(val)) for val in flat], dtype=float)
        result = self.mu + offsets.reshape(q_arr.shape)
        if result.ndim == 0:
            return float(result)
        return result

    def rvs(self, size=None, random_state=None):
        """
        Draw random variates with the Best & Fisher (1979) rejection sampler.

        Parameters
        ----------
        size : int or tuple, optional
            Output shape. None returns a single float.
        random_state : int, Generator or None, optional
            Seed or generator passed to ``np.random.default_rng``.

        Returns
        -------
        samples : float or np.ndarray
            Angles in [mu - π, mu + π).
        """
        rng = np.random.default_rng(random_state)
        kappa = self.kappa

        a = 1.0 + np.sqrt(1.0 + 4.0 * kappa**2)
        b = (a - np.sqrt(2.0 * a)) / (2.0 * kappa)
        r = (1.0 + b**2) / (2.0 * b)

        if size is None:
            target_shape = ()
        elif np.isscalar(size):
            target_shape = (int(size),)
        else:
            target_shape = tuple(int(s) for s in size)
        total = int(np.prod(target_shape))

        samples = np.empty(total, dtype=float)
        for idx in range(total):
            while True:
                z = np.cos(np.pi * rng.uniform())
                f = (1.0 + r * z) / (r + z)
                c = kappa * (r - f)
                u2 = rng.uniform()
                if u2 < c * (2.0 - c) or u2 <= c * np.exp(1.0 - c):
                    break
            samples[idx] = self.mu + np.sign(rng.uniform() - 0.5) * np.arccos(np.clip(f, -1.0, 1.0))

        # same period as cdf and ppf: [mu - pi, mu + pi)
        samples = np.asarray(angmod(samples - self.mu, (-np.pi, np.pi))) + self.mu
        if target_shape == ():
            return float(samples[0])
        return samples.reshape(target_shape)

    # ------------------------------------------------------------------
    # Circular descriptive helpers
    # ------------------------------------------------------------------
    def trig_moment(self, p: int = 1) -> complex:
        r"""Trigonometric moment $E[e^{ip\Theta}] = \frac{I_p(\kappa)}{I_0(\kappa)} e^{ip\mu}$."""
        if int(round(p)) != p:
            raise InvalidParameterError("`p` must be an integer.")
        p = int(round(p))
        if p == 0:
            return complex(1.0, 0.0)
        rho = float(bessel_ratios(abs(p), self.kappa)[-1])
        return complex(rho * np.cos(p * self.mu), rho * np.sin(p * self.mu))

    def r(self) -> float:
        """Mean resultant length R = I_1(κ) / I_0(κ)."""
        return A1(self.kappa)

    def mean(self) -> float:
        """Mean direction reduced to [-π, π)."""
        return angmod(self.mu, (-np.pi, np.pi))

    def var(self) -> float:
        """Circular variance 1 - R."""
        return 1.0 - self.r()

    def std(self) -> float:
        """Circular standard deviation sqrt(-2 ln R)."""
        return float(np.sqrt(-2.0 * np.log(self.r())))


def vonmises(mu: float, kappa: float) -> VonMises:
    """Construct a validated :class:`VonMises` distribution."""
    return VonMises(mu, kappa)
