"""
Tests for the parameter bundle and its JSON round trip.
"""

import json

import pytest

from spinrhs import (
    Mode, LLGParameters, CurrentParameters, SimulationParameters,
    ConfigError, load_parameters, save_parameters
)


BASE_CONFIG = {
    "llg": {
        "t_max": 20.0,
        "h_step": 0.05,
        "neighbor_count": 4,
        "tolerance": 1e-8,
        "lambda": 0.1,
        "temperature": 0.0,
        "run_count": 2,
        "parallel": True
    },
    "current": {"jx": 0.5, "jy": 0.0}
}


class TestMode:

    @pytest.mark.parametrize("value, expected", [
        (Mode.RELAXATION, Mode.RELAXATION),
        ("relaxation", Mode.RELAXATION),
        ("Dynamics", Mode.DYNAMICS),
        (" DYNAMICS ", Mode.DYNAMICS),
    ])
    def test_coerce(self, value, expected):
        assert Mode.coerce(value) is expected

    @pytest.mark.parametrize("value", [True, False, 0, "relax", None])
    def test_coerce_rejects(self, value):
        with pytest.raises(ConfigError) as excinfo:
            Mode.coerce(value)
        assert excinfo.value.field == "mode"


class TestFromDict:

    def test_full_config(self):
        params = SimulationParameters.from_dict(BASE_CONFIG)

        assert params.llg.damping == 0.1
        assert params.llg.t_max == 20.0
        assert params.llg.run_count == 2
        assert params.llg.parallel is True
        assert params.current.jx == 0.5
        assert params.current.has_current

    def test_damping_key_and_defaults(self):
        params = SimulationParameters.from_dict({
            "llg": {"damping": 1},
            "current": {"jx": 0, "jy": 0}
        })

        assert params.llg.damping == 1.0
        assert isinstance(params.llg.damping, float)
        assert params.llg.neighbor_count == 4
        assert not params.current.has_current

    def test_extra_sections_are_kept(self):
        config = dict(BASE_CONFIG, field={"h_ext": [0.0, 0.0, 1.0]})
        params = SimulationParameters.from_dict(config)

        assert params.extra == {"field": {"h_ext": [0.0, 0.0, 1.0]}}

    @pytest.mark.parametrize("section, missing", [
        ("llg", "lambda"),
        ("current", "jx"),
        ("current", "jy"),
    ])
    def test_missing_required_field(self, section, missing):
        config = json.loads(json.dumps(BASE_CONFIG))
        del config[section][missing]

        with pytest.raises(ConfigError) as excinfo:
            SimulationParameters.from_dict(config)
        expected = "llg.damping" if missing == "lambda" else f"current.{missing}"
        assert excinfo.value.field == expected

    @pytest.mark.parametrize("section", ["llg", "current"])
    def test_missing_section(self, section):
        config = dict(BASE_CONFIG)
        del config[section]

        with pytest.raises(ConfigError) as excinfo:
            SimulationParameters.from_dict(config)
        assert excinfo.value.field == section

    def test_damping_given_twice(self):
        config = json.loads(json.dumps(BASE_CONFIG))
        config["llg"]["damping"] = 0.2

        with pytest.raises(ConfigError):
            SimulationParameters.from_dict(config)

    def test_unknown_field(self):
        config = json.loads(json.dumps(BASE_CONFIG))
        config["current"]["jz"] = 1.0

        with pytest.raises(ConfigError) as excinfo:
            SimulationParameters.from_dict(config)
        assert excinfo.value.field == "current.jz"

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigError):
            SimulationParameters.from_dict({"llg": [0.1], "current": {"jx": 0, "jy": 0}})


class TestValidation:

    @pytest.mark.parametrize("kwargs, field", [
        ({"damping": -0.1}, "llg.damping"),
        ({"damping": float("nan")}, "llg.damping"),
        ({"damping": "0.1"}, "llg.damping"),
        ({"damping": True}, "llg.damping"),
        ({"damping": 0.1, "h_step": 0.0}, "llg.h_step"),
        ({"damping": 0.1, "temperature": -1.0}, "llg.temperature"),
        ({"damping": 0.1, "neighbor_count": 0}, "llg.neighbor_count"),
        ({"damping": 0.1, "run_count": 1.5}, "llg.run_count"),
        ({"damping": 0.1, "parallel": 1}, "llg.parallel"),
    ])
    def test_llg_validation(self, kwargs, field):
        with pytest.raises(ConfigError) as excinfo:
            LLGParameters(**kwargs)
        assert excinfo.value.field == field

    def test_current_must_be_finite(self):
        with pytest.raises(ConfigError) as excinfo:
            CurrentParameters(jx=float("inf"), jy=0.0)
        assert excinfo.value.field == "current.jx"

    def test_parameters_are_frozen(self):
        params = CurrentParameters(jx=1.0, jy=0.0)
        with pytest.raises(AttributeError):
            params.jx = 2.0


class TestJsonFiles:

    def test_save_and_load(self, tmp_path):
        params = SimulationParameters.from_dict(BASE_CONFIG)
        filename = tmp_path / "params.json"

        save_parameters(params, filename)
        loaded = load_parameters(filename)

        assert loaded == params

    def test_to_dict_uses_damping_key(self):
        data = SimulationParameters.from_dict(BASE_CONFIG).to_dict()
        assert data["llg"]["damping"] == 0.1
        assert "lambda" not in data["llg"]

    def test_invalid_json(self, tmp_path):
        filename = tmp_path / "broken.json"
        filename.write_text("{ not json")

        with pytest.raises(ConfigError):
            load_parameters(filename)
