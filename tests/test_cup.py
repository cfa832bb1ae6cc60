"""
Tests for the layered contents of a cup.
"""
import itertools

import pytest

from bubbletea.model.cup import CupLiquids


@pytest.fixture
def cup() -> CupLiquids:
    return CupLiquids()


def amounts(cup: CupLiquids) -> list:
    return [layer.amount for layer in cup.layers]


class TestAdd:
    def test_conservation(self, cup, water, oil):
        poured = [0.1, 0.25, 0.3, 0.05]
        for liquid, amount in zip([water, oil, oil, water], poured):
            cup.add(liquid, amount)
        assert cup.total_amount == pytest.approx(sum(poured))

    def test_same_type_merges(self, cup, water):
        cup.add(water, 1.0)
        cup.add(water, 1.0)
        assert amounts(cup) == [2.0]

    def test_different_type_pushes(self, cup, water, oil):
        cup.add(water, 1.0)
        cup.add(oil, 1.0)
        assert [layer.type for layer in cup.layers] == [water, oil]

    def test_no_merge_with_lower_layer(self, cup, water, oil):
        cup.add(water, 1.0)
        cup.add(oil, 1.0)
        cup.add(water, 1.0)
        assert amounts(cup) == [1.0, 1.0, 1.0]

    def test_equal_mixture_merges(self, cup, water, oil):
        cup.add({water: 1.0, oil: 3.0}, 0.5)
        cup.add({oil: 3.0, water: 1.0}, 0.5)
        assert amounts(cup) == [1.0]

    def test_scaled_mixture_does_not_merge(self, cup, water, oil):
        cup.add({water: 1.0, oil: 3.0}, 0.5)
        cup.add({water: 2.0, oil: 6.0}, 0.5)
        assert len(cup) == 2

    def test_type_merges_into_pure_layer_of_any_weight(self, cup, water):
        cup.add({water: 4.0}, 1.0)
        cup.add(water, 1.0)
        assert amounts(cup) == [2.0]

    def test_merge_keeps_color(self, cup, red, blue):
        cup.add({red: 1.0, blue: 1.0}, 1.0)
        color = cup.layers[-1].color
        cup.add({red: 1.0, blue: 1.0}, 1.0)
        assert cup.layers[-1].color == color

    @pytest.mark.parametrize("amount", [0.0, -1.0, float("nan")])
    def test_non_positive_amount_rejected(self, cup, water, amount):
        cup.render_description()
        with pytest.raises(ValueError):
            cup.add(water, amount)
        assert cup.is_empty
        assert not cup.needs_update

    def test_invalid_mixture_rejected(self, cup, water):
        with pytest.raises(ValueError):
            cup.add({water: 0.0}, 1.0)
        assert cup.is_empty


class TestRemoveLiquid:
    def test_lifo_drain(self, cup, water, oil):
        cup.add(water, 1.0)
        cup.add(oil, 1.0)

        cup.remove_liquid(0.5)

        assert [layer.type for layer in cup.layers] == [water, oil]
        assert amounts(cup) == [1.0, 0.5]

    def test_drains_through_several_layers(self, cup, water, oil, red):
        cup.add(water, 1.0)
        cup.add(oil, 0.5)
        cup.add(red, 0.25)

        cup.remove_liquid(1.0)

        assert [layer.type for layer in cup.layers] == [water]
        assert amounts(cup) == [0.75]

    def test_exact_layer_amount_removes_layer(self, cup, water, oil):
        cup.add(water, 1.0)
        cup.add(oil, 0.5)
        cup.remove_liquid(0.5)
        assert [layer.type for layer in cup.layers] == [water]

    @pytest.mark.parametrize("drain", [0.0, 0.4, 1.0, 2.5, 10.0])
    def test_drain_conservation(self, cup, water, oil, drain):
        cup.add(water, 1.5)
        cup.add(oil, 1.0)
        previous = cup.total_amount

        cup.remove_liquid(drain)

        assert cup.total_amount == pytest.approx(max(0.0, previous - drain))

    def test_over_drain_empties(self, cup, water):
        cup.add(water, 1.0)
        cup.remove_liquid(5.0)
        assert cup.is_empty
        assert cup.total_amount == 0.0

    def test_drain_empty_cup(self, cup):
        cup.remove_liquid(1.0)
        assert cup.is_empty

    def test_negative_amount_rejected(self, cup, water):
        cup.add(water, 1.0)
        with pytest.raises(ValueError):
            cup.remove_liquid(-0.1)
        assert amounts(cup) == [1.0]

    @pytest.mark.parametrize(
        "poured", list(itertools.combinations((0.05, 0.1, 0.15, 0.2, 0.3, 0.35, 0.7), 3))
    )
    def test_draining_total_amount_empties(self, cup, water, oil, poured):
        for liquid, amount in zip(itertools.cycle([water, oil]), poured):
            cup.add(liquid, amount)

        cup.remove_liquid(cup.total_amount)

        assert cup.is_empty
        assert cup.total_amount == 0.0


class TestClear:
    def test_clear_empties(self, cup, water, oil):
        cup.add(water, 0.1)
        cup.add(oil, 0.2)
        cup.render_description()

        cup.clear()

        assert cup.is_empty
        assert cup.needs_update
        assert cup.render_description().is_empty

    def test_clear_empty_cup(self, cup):
        cup.clear()
        assert cup.is_empty


class TestBlend:
    def test_single_layer_and_amount_preserved(self, cup, water, oil, red):
        cup.add(water, 0.3)
        cup.add(oil, 0.2)
        cup.add(red, 0.1)
        total = cup.total_amount

        cup.blend()

        assert len(cup) == 1
        assert cup.total_amount == total
        assert set(cup.layers[0].mixture) == {water, oil, red}

    def test_blend_empty_cup(self, cup):
        cup.blend()
        assert cup.is_empty
        assert cup.needs_update

    def test_blended_mixture_merges_with_same_blend(self, cup, red, blue):
        cup.add(red, 1.0)
        cup.add(blue, 1.0)
        cup.blend()

        cup.add({red: 0.5, blue: 0.5}, 1.0)

        assert amounts(cup) == [3.0]


class TestNeedsUpdate:
    def test_new_cup_needs_first_draw(self, cup):
        assert cup.needs_update

    def test_projection_clears_flag(self, cup, water):
        cup.render_description()
        assert not cup.needs_update

        cup.add(water, 1.0)
        assert cup.needs_update

        cup.render_description()
        assert not cup.needs_update

    @pytest.mark.parametrize("operation", ["remove", "blend"])
    def test_mutations_set_flag(self, cup, water, operation):
        cup.add(water, 1.0)
        cup.render_description()

        if operation == "remove":
            cup.remove_liquid(0.5)
        else:
            cup.blend()

        assert cup.needs_update

    def test_layers_are_copies(self, cup, water):
        cup.add(water, 1.0)
        cup.render_description()

        cup.layers[0].amount = 100.0

        assert cup.total_amount == 1.0
        assert not cup.needs_update


def test_water_oil_scenario(cup, water, oil):
    cup.add(water, 1.0)
    cup.add(water, 1.0)
    assert amounts(cup) == [2.0]

    cup.add(oil, 1.0)
    assert [(layer.type, layer.amount) for layer in cup.layers] == [(water, 2.0), (oil, 1.0)]

    cup.remove_liquid(1.5)
    assert [(layer.type, layer.amount) for layer in cup.layers] == [(water, 1.5)]

    cup.blend()
    assert len(cup) == 1
    assert cup.layers[0].amount == 1.5
    assert dict(cup.layers[0].mixture) == {water: 1.0}
