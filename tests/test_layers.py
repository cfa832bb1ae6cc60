"""
Tests for liquid layers, their derived color and blending.
"""
import math

import pytest

from bubbletea.model.layers import LiquidLayer, blend_layers, mixture_color


class TestLiquidLayer:
    def test_pure_layer_uses_base_color_exactly(self, water):
        layer = LiquidLayer({water: 3.7}, 1.0)
        assert layer.color is water.color
        assert layer.type == water

    def test_mixed_layer_has_no_type(self, red, blue):
        layer = LiquidLayer({red: 1.0, blue: 1.0}, 1.0)
        assert layer.type is None
        assert layer.color.red == pytest.approx(math.sqrt(0.5))
        assert layer.color.blue == pytest.approx(math.sqrt(0.5))

    def test_mixture_is_read_only(self, water):
        layer = LiquidLayer.pure(water, 1.0)
        with pytest.raises(TypeError):
            layer.mixture[water] = 2.0

    def test_mixture_is_copied_from_input(self, water, oil):
        source = {water: 1.0}
        layer = LiquidLayer(source, 1.0)
        source[oil] = 1.0
        assert dict(layer.mixture) == {water: 1.0}

    def test_color_fixed_when_amount_changes(self, red, blue):
        layer = LiquidLayer({red: 1.0, blue: 3.0}, 1.0)
        color = layer.color
        layer.amount += 5.0
        assert layer.color is color

    def test_negative_amount_rejected(self, water):
        with pytest.raises(ValueError):
            LiquidLayer.pure(water, -1.0)

    def test_empty_mixture_rejected(self):
        with pytest.raises(ValueError):
            LiquidLayer({}, 1.0)

    def test_copy_is_independent(self, water):
        layer = LiquidLayer.pure(water, 1.0)
        clone = layer.copy()
        clone.amount = 9.0
        assert layer.amount == 1.0
        assert clone.color is layer.color

    def test_strict_mixture_equality(self, water, oil):
        layer = LiquidLayer({water: 1.0, oil: 2.0}, 1.0)
        assert layer.has_mixture({oil: 2.0, water: 1.0})
        # Same proportions, different scale
        assert not layer.has_mixture({water: 2.0, oil: 4.0})


class TestMixtureColor:
    def test_two_type_symmetry(self, water, oil):
        a = mixture_color({water: 1.0, oil: 1.0})
        b = mixture_color({oil: 1.0, water: 1.0})
        assert a.as_tuple() == pytest.approx(b.as_tuple())


class TestBlendLayers:
    def test_nothing_to_blend(self):
        assert blend_layers([]) is None

    def test_amount_preserved(self, water, oil):
        layers = [LiquidLayer.pure(water, 0.3), LiquidLayer.pure(oil, 0.45), LiquidLayer.pure(water, 0.25)]

        blended = blend_layers(layers)

        assert blended.amount == 0.3 + 0.45 + 0.25
        assert dict(blended.mixture) == pytest.approx({water: 0.55, oil: 0.45})

    def test_unnormalized_layer_weights(self, red, blue):
        layers = [LiquidLayer({red: 2.0, blue: 2.0}, 1.0), LiquidLayer({red: 1.0}, 1.0)]

        blended = blend_layers(layers)

        assert dict(blended.mixture) == pytest.approx({red: 0.75, blue: 0.25})

    def test_blended_color_is_rederived(self, red, blue):
        blended = blend_layers([LiquidLayer.pure(red, 1.0), LiquidLayer.pure(blue, 1.0)])
        assert blended.color == mixture_color({red: 0.5, blue: 0.5})

    def test_single_pure_layer_stays_pure(self, water):
        blended = blend_layers([LiquidLayer.pure(water, 1.5)])
        assert dict(blended.mixture) == {water: 1.0}
        assert blended.color is water.color
