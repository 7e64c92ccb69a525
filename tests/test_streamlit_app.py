"""
Headless tests for the Streamlit calculator screen
"""
import json
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from estimation.factors import DIETS

APP_PATH = str(Path(__file__).resolve().parent.parent / "streamlit_app.py")


@pytest.fixture
def app(monkeypatch):
    monkeypatch.delenv("FOOTPRINT_FACTORS_FILE", raising=False)
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    assert not at.exception
    return at


def _fill(at, **values):
    for name, value in values.items():
        at.number_input(key=f"field_{name}").set_value(value)


def test_starts_in_editing_with_defaults(app):
    assert len(app.number_input) == 5
    for widget in app.number_input:
        assert widget.value == 0.0
    assert app.selectbox(key="field_diet").value == "average"
    assert len(app.metric) == 0


def test_calculate_shows_result(app):
    _fill(app, transportation=100.0, electricity=200.0, lpg=10.0, png=5.0, waste=10.0)
    app.selectbox(key="field_diet").select_index(DIETS.index("high"))
    app.button(key="calculate").click().run()

    assert not app.exception
    assert app.metric[0].value == "2,115.45 kg CO₂e"
    assert "Low" in app.success[0].value
    assert len(app.number_input) == 0


def test_high_footprint_shown_as_error(app):
    _fill(app, electricity=20000.0)
    app.button(key="calculate").click().run()

    assert app.metric[0].value == "11,095.00 kg CO₂e"
    assert "High" in app.error[0].value


def test_medium_footprint_shown_as_warning(app):
    _fill(app, electricity=10000.0)
    app.button(key="calculate").click().run()

    assert app.metric[0].value == "6,095.00 kg CO₂e"
    assert "Medium" in app.warning[0].value


def test_gasoline_field_is_optional(app):
    assert len(app.number_input) == 5
    app.checkbox(key="include_gas").check().run()
    assert len(app.number_input) == 6

    app.number_input(key="field_gas").set_value(10.0)
    app.button(key="calculate").click().run()
    assert app.metric[0].value == "1,118.10 kg CO₂e"


def test_reset_restores_defaults(app):
    _fill(app, transportation=100.0, waste=10.0)
    app.button(key="calculate").click().run()
    assert len(app.metric) == 1

    app.button(key="reset").click().run()

    assert not app.exception
    assert len(app.metric) == 0
    assert app.number_input(key="field_transportation").value == 0.0
    assert app.number_input(key="field_waste").value == 0.0
    assert app.selectbox(key="field_diet").value == "average"


def test_regional_factor_file(monkeypatch, tmp_path):
    path = tmp_path / "factors.json"
    path.write_text(json.dumps({"electricity": 1.0}), encoding="utf-8")
    monkeypatch.setenv("FOOTPRINT_FACTORS_FILE", str(path))

    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    at.number_input(key="field_electricity").set_value(100.0)
    at.button(key="calculate").click().run()

    assert at.metric[0].value == "1,195.00 kg CO₂e"


def test_bad_factor_file_falls_back_to_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("FOOTPRINT_FACTORS_FILE", str(tmp_path / "missing.json"))

    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()

    assert not at.exception
    assert "Using default factors" in at.error[0].value
    at.button(key="calculate").click().run()
    assert at.metric[0].value == "1,095.00 kg CO₂e"


def test_fields_show_their_units(app):
    assert app.number_input(key="field_transportation").help == "Unit: km/week"
    assert app.number_input(key="field_electricity").help == "Unit: kWh/month"


def test_result_shows_submitted_inputs(app):
    _fill(app, transportation=100.0, waste=10.0)
    app.button(key="calculate").click().run()

    shown = json.loads(app.expander[0].json[0].value)
    assert shown["transportation"] == 100.0
    assert shown["waste"] == 10.0
    assert shown["diet"] == "average"


def test_huge_factor_file_falls_back_to_defaults(monkeypatch, tmp_path):
    path = tmp_path / "huge.json"
    path.write_text('{"electricity": ' + "9" * 400 + "}", encoding="utf-8")
    monkeypatch.setenv("FOOTPRINT_FACTORS_FILE", str(path))

    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()

    assert not at.exception
    assert "Using default factors" in at.error[0].value
