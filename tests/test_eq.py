import pytest

from otodecks.eq import LABEL_BOUNDS, SLIDER_BOUNDS, EQBand, EQControls, Slider


def test_band_labels():
    assert EQBand("Low") is EQBand.LOW
    assert EQBand("Mid") is EQBand.MID
    assert EQBand("High") is EQBand.HIGH


def test_unknown_band_label_rejected():
    with pytest.raises(ValueError):
        EQBand("Treble")


def test_eq_sliders_start_at_minimum():
    controls = EQControls()
    assert all(controls.slider(band).value == pytest.approx(0.1) for band in EQBand)


def test_eq_value_is_snapped_to_interval():
    controls = EQControls()
    controls.set_value(EQBand.MID, 1.23)
    assert controls.slider(EQBand.MID).value == pytest.approx(1.2)


def test_eq_value_is_clamped():
    controls = EQControls()
    controls.set_value(EQBand.HIGH, 10.0)
    assert controls.slider(EQBand.HIGH).value == pytest.approx(5.0)


def test_bands_are_independent():
    controls = EQControls()
    controls.set_value(EQBand.LOW, 2.0)
    assert controls.slider(EQBand.HIGH).value == pytest.approx(0.1)


def test_on_change_fires_only_on_change():
    received = []
    slider = Slider(0.0, 1.0, on_change=received.append)
    slider.set_value(0.25)
    slider.set_value(0.25)
    assert received == [0.25]


def test_continuous_slider_keeps_value():
    slider = Slider(0.0, 10.0)
    slider.set_value(3.3333)
    assert slider.value == 3.3333


def test_bad_range_rejected():
    with pytest.raises(ValueError):
        Slider(1.0, 0.0)


@pytest.mark.parametrize("label", ["Low", "Mid", "High"])
def test_labels_sit_below_slider_tops(label):
    band = EQBand(label)
    sx, sy, sw, _ = SLIDER_BOUNDS[band]
    lx, ly, lw, _ = LABEL_BOUNDS[band]
    assert (lx, lw) == (sx, sw)
    assert ly > sy