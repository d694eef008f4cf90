"""Tests for FCB1010 pedal number mapping."""

import pytest

from pedalbridge.devices.fcb1010 import PedalMapper


@pytest.mark.unit
class TestPedalMapper:
    """Test logical index <-> pedal number conversion."""

    @pytest.mark.parametrize("index,pedal", [(0, 1), (4, 5), (8, 9), (9, 0)])
    def test_led_pedals(self, index, pedal):
        """Pedals 1-9 are offset by one, the tenth pedal wraps to 0."""
        assert PedalMapper.physical_pedal_number(index) == pedal

    @pytest.mark.parametrize("index", [10, 11, 23, 127, -1])
    def test_other_indices_pass_through(self, index):
        """Indices outside the LED pedals are sent unchanged."""
        assert PedalMapper.physical_pedal_number(index) == index

    @pytest.mark.parametrize("value,index", [(1, 0), (9, 8), (0, 9)])
    def test_controller_value_to_index(self, value, index):
        """Pedal CC values map back to logical indices."""
        assert PedalMapper.pedal_index_from_controller_value(value) == index

    def test_up_down_pedals(self):
        """Controller values 10 and 11 are the up/down pedals."""
        assert PedalMapper.pedal_index_from_controller_value(10) == PedalMapper.UP
        assert PedalMapper.pedal_index_from_controller_value(11) == PedalMapper.DOWN

    def test_led_pedals_are_inverse(self):
        """Both directions agree for every LED pedal."""
        for index in range(PedalMapper.NUM_LED_PEDALS):
            pedal = PedalMapper.physical_pedal_number(index)
            assert PedalMapper.pedal_index_from_controller_value(pedal) == index
