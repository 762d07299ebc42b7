"""Unit tests for the random number generator.

Tests cover:
- Value ranges of float and integer draws
- Reproducibility of a sequence
- Independence of different sequences
- Array draws consuming the stream like scalar draws
"""

import numpy as np
import pytest

from radiant.core.rng import ONE_MINUS_EPSILON, Rng


class TestRngRanges:
    """Tests for the range of generated values."""

    def test_uniform_float_in_unit_interval(self):
        """Test uniform_float stays in [0, 1)."""
        rng = Rng(3)
        values = [rng.uniform_float() for _ in range(2000)]
        assert min(values) >= 0.0
        assert max(values) < 1.0

    def test_uniform_floats_shape_and_range(self):
        """Test uniform_floats returns the requested shape within [0, 1)."""
        values = Rng(1).uniform_floats((5, 4, 2))
        assert values.shape == (5, 4, 2)
        assert np.all(values >= 0.0)
        assert np.all(values <= ONE_MINUS_EPSILON)

    def test_uniform_uint32_in_bound(self):
        """Test integer draws stay within [0, bound)."""
        rng = Rng(0)
        values = {rng.uniform_uint32(7) for _ in range(500)}
        assert values <= set(range(7))
        assert len(values) == 7

    def test_uniform_uint32_rejects_empty_range(self):
        """Test a non-positive bound is rejected."""
        with pytest.raises(ValueError):
            Rng(0).uniform_uint32(0)

    def test_negative_sequence_rejected(self):
        """Test negative sequence indices are rejected."""
        with pytest.raises(ValueError):
            Rng(-1)


class TestRngSequences:
    """Tests for sequence determinism and independence."""

    def test_same_sequence_reproduces(self):
        """Test two generators on the same sequence agree."""
        a = Rng(42)
        b = Rng(42)
        assert [a.uniform_float() for _ in range(10)] == [b.uniform_float() for _ in range(10)]

    def test_different_sequences_differ(self):
        """Test different sequence indices give different streams."""
        a = Rng(1)
        b = Rng(2)
        assert [a.uniform_float() for _ in range(10)] != [b.uniform_float() for _ in range(10)]

    def test_set_sequence_restarts(self):
        """Test set_sequence rewinds to the start of a sequence."""
        rng = Rng(5)
        first = [rng.uniform_float() for _ in range(4)]
        rng.set_sequence(5)
        assert [rng.uniform_float() for _ in range(4)] == first
        assert rng.sequence_index == 5

    def test_array_draws_match_scalar_draws(self):
        """Test uniform_floats(n) consumes the stream like n scalar draws."""
        scalar = Rng(9)
        batch = Rng(9)
        expected = [scalar.uniform_float() for _ in range(6)]
        np.testing.assert_array_equal(batch.uniform_floats(6), expected)
        # Both streams are at the same position afterwards
        assert scalar.uniform_float() == batch.uniform_float()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
