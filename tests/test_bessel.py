import numpy as np
import pytest
from scipy import special

from circdist.bessel import bessel_i0, bessel_i_sequence, bessel_ratios
from circdist.errors import BesselProviderError, InvalidParameterError


def test_bessel_i_sequence():
    values = bessel_i_sequence(5, 2.0)
    assert values.shape == (5,)
    np.testing.assert_allclose(values, special.iv(np.arange(1, 6), 2.0), rtol=1e-14)

    # A&S Table 9.8
    np.testing.assert_allclose(values[0], 1.590636855, rtol=1e-9)

    scaled = bessel_i_sequence(5, 2.0, scaled=True)
    np.testing.assert_allclose(scaled, values * np.exp(-2.0), rtol=1e-13)


def test_bessel_i0():
    np.testing.assert_allclose(bessel_i0(1.0), 1.266065878, rtol=1e-9)
    np.testing.assert_allclose(bessel_i0(0.0), 1.0)
    np.testing.assert_allclose(bessel_i0(3.0, scaled=True), special.i0(3.0) * np.exp(-3.0))
    assert isinstance(bessel_i0(1.0), float)


def test_bessel_ratios_decay():
    ratios = bessel_ratios(100, 4.0)
    assert ratios.shape == (100,)
    assert np.all(np.diff(ratios) <= 0.0)
    assert np.all(ratios < 1.0)
    np.testing.assert_allclose(ratios[0], special.i1(4.0) / special.i0(4.0), rtol=1e-11)
    assert ratios[-1] < 1e-100


def test_bessel_ratios_large_kappa():
    # e^kappa overflows double precision, the ratios must not
    ratios = bessel_ratios(10, 5000.0)
    assert np.all(np.isfinite(ratios))
    # I_j / I_0 ~ exp(-j^2 / (2 kappa)) for j << kappa
    np.testing.assert_allclose(ratios, np.exp(-np.arange(1, 11) ** 2 / 10000.0), rtol=1e-3)


def test_bessel_unscaled_overflow_raises():
    with pytest.raises(BesselProviderError):
        bessel_i0(1000.0)
    with pytest.raises(BesselProviderError):
        bessel_i_sequence(3, 1000.0)
    with pytest.raises(BesselProviderError):
        bessel_i0(np.inf, scaled=True)


@pytest.mark.parametrize("kappa", [-1.0, np.nan, "x"])
def test_bessel_invalid_argument(kappa):
    with pytest.raises(BesselProviderError):
        bessel_ratios(3, kappa)


@pytest.mark.parametrize("n_terms", [0, -2, 1.5, True])
def test_bessel_invalid_order_count(n_terms):
    with pytest.raises(InvalidParameterError):
        bessel_i_sequence(n_terms, 1.0)


def test_bessel_provider_error_is_arithmetic_error():
    with pytest.raises(ArithmeticError):
        bessel_i0(-1.0)
