"""
Tests for the effective field providers.
"""

import numpy as np
import pytest

from spinrhs import (
    UniformFieldProvider, ExchangeFieldProvider, UniaxialAnisotropyFieldProvider,
    CallableFieldProvider, CompositeFieldProvider, EffectiveFieldProvider,
    ShapeMismatchError
)
from spinrhs.utils.random import random_unit_field, uniform_field, set_random_seed


def test_provider_is_abstract():
    with pytest.raises(TypeError):
        EffectiveFieldProvider()


class TestUniformField:

    def test_constant_field(self):
        provider = UniformFieldProvider([0.1, 0.2, 0.3])
        field = provider.compute(random_unit_field(3, 2, seed=0), None)

        assert field.shape == (3, 3, 2)
        assert np.allclose(field, uniform_field([0.1, 0.2, 0.3], 3, 2))

    def test_pulsed_field(self):
        provider = UniformFieldProvider([0.0, 0.0, 1.0], time_profile=lambda t: 1.0 if t < 1.0 else 0.0)
        spins = random_unit_field(2, 2, seed=0)

        provider.update(0.5)
        assert np.allclose(provider.compute(spins, None)[2], 1.0)

        provider.update(1.5)
        assert np.allclose(provider.compute(spins, None), 0.0)

    def test_buffer_is_reused(self):
        provider = UniformFieldProvider([1.0, 0.0, 0.0])
        spins = random_unit_field(2, 2, seed=0)

        first = provider.compute(spins, None)
        second = provider.compute(spins, None)
        assert first is second

        resized = provider.compute(random_unit_field(3, 3, seed=0), None)
        assert resized.shape == (3, 3, 3)

    def test_rejects_bad_vector(self):
        with pytest.raises(ValueError):
            UniformFieldProvider([1.0, 0.0])

    def test_rejects_bad_spin_shape(self):
        with pytest.raises(ShapeMismatchError):
            UniformFieldProvider([1.0, 0.0, 0.0]).compute(np.zeros((2, 2, 2)), None)


class TestExchangeField:

    def test_uniform_state_gets_four_neighbours(self):
        spins = uniform_field([0.0, 0.0, 1.0], 4, 5)
        field = ExchangeFieldProvider(0.5).compute(spins, None)

        assert np.allclose(field, uniform_field([0.0, 0.0, 2.0], 4, 5))

    def test_single_site_couples_to_itself(self):
        spins = uniform_field([1.0, 0.0, 0.0], 1, 1)
        field = ExchangeFieldProvider(1.0).compute(spins, None)

        assert np.allclose(field[:, 0, 0], [4.0, 0.0, 0.0])


class TestAnisotropyField:

    def test_field_along_axis(self):
        spins = uniform_field([0.6, 0.0, 0.8], 2, 3)
        provider = UniaxialAnisotropyFieldProvider(0.5, axis=[0.0, 0.0, 2.0])

        field = provider.compute(spins, None)

        assert np.allclose(field, uniform_field([0.0, 0.0, 0.8], 2, 3))

    def test_rejects_zero_axis(self):
        with pytest.raises(ValueError):
            UniaxialAnisotropyFieldProvider(1.0, axis=[0.0, 0.0, 0.0])


class TestComposedProviders:

    def test_callable_provider(self):
        provider = CallableFieldProvider(lambda spins, params: 2.0 * spins)
        spins = random_unit_field(2, 2, seed=1)

        assert np.allclose(provider.compute(spins, None), 2.0 * spins)

    def test_time_dependent_callable(self):
        provider = CallableFieldProvider(lambda spins, params, t: t * spins, time_dependent=True)
        spins = random_unit_field(2, 2, seed=1)

        provider.update(3.0)

        assert np.allclose(provider.compute(spins, None), 3.0 * spins)

    def test_composite_sums_contributions(self):
        spins = random_unit_field(3, 3, seed=2)
        exchange = ExchangeFieldProvider(1.0)
        applied = UniformFieldProvider([0.0, 0.0, 0.5])
        composite = CompositeFieldProvider([exchange, applied])

        total = composite.compute(spins, None)

        expected = exchange.compute(spins, None) + applied.compute(spins, None)
        assert np.allclose(total, expected)

    def test_composite_forwards_time(self):
        spins = random_unit_field(1, 1, seed=3)
        pulsed = UniformFieldProvider([1.0, 0.0, 0.0], time_profile=lambda t: t)
        composite = CompositeFieldProvider([pulsed])

        composite.update(4.0)

        assert np.allclose(composite.compute(spins, None)[:, 0, 0], [4.0, 0.0, 0.0])

    def test_composite_checks_contribution_shape(self):
        bad = CallableFieldProvider(lambda spins, params: np.zeros((3, 1, 1)))
        composite = CompositeFieldProvider([bad])

        with pytest.raises(ShapeMismatchError):
            composite.compute(random_unit_field(2, 2, seed=4), None)

    def test_composite_requires_providers(self):
        with pytest.raises(ValueError):
            CompositeFieldProvider([])


class TestRandomFields:

    def test_random_unit_field_is_normalized(self):
        spins = random_unit_field(5, 7, seed=11)

        assert spins.shape == (3, 5, 7)
        assert np.allclose(np.linalg.norm(spins, axis=0), 1.0)

    def test_set_random_seed_reproduces_field(self):
        set_random_seed(21)
        first = random_unit_field(3, 3)
        set_random_seed(21)
        second = random_unit_field(3, 3)

        assert np.array_equal(first, second)
