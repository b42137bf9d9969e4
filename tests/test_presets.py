import dataclasses
import logging

import pytest

from force_diagram.config import RuntimeConfig, configure_logging, load_config
from force_diagram.errors import (
    ConflictingOptionError,
    RangeError,
    UnknownLayoutError,
    UnknownPaletteIdentifierError,
)
from force_diagram.palettes import (
    DEFAULT_FAMILY,
    DEFAULT_SOURCE,
    PaletteFamily,
    PaletteSource,
)
from force_diagram.presets import (
    DEFAULT_CONFIG,
    PARAMETER_BOUNDS,
    ColorMode,
    DiagramConfig,
    LayoutAlgorithm,
)


class TestDiagramConfig:

    def test_defaults_are_valid(self):
        for name, rng in PARAMETER_BOUNDS.items():
            value = getattr(DEFAULT_CONFIG, name)
            assert value is None or rng.contains(value), name

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.degree_filter = 3

    def test_strings_normalised(self):
        cfg = DiagramConfig(
            layout_algorithm="FORCE_ATLAS",
            node_color_type="Ranking",
            palette_source="colorbrewer",
            palette_family="sequential",
        )
        assert cfg.layout_algorithm is LayoutAlgorithm.FORCE_ATLAS
        assert cfg.node_color_type is ColorMode.RANKING
        assert cfg.palette_source is PaletteSource.COLORBREWER
        assert cfg.palette_family is PaletteFamily.SEQUENTIAL

    @pytest.mark.parametrize("field, value, message", [
        ("figure_width", 0, "must be greater than 0"),
        ("edge_opacity", 101.0, "must not be greater than 100"),
        ("label_percentile", -0.5, "must not be less than 0"),
        ("num_colors", 0, "must not be less than 1"),
        ("degree_filter_iterations", 0, "must not be less than 1"),
        ("gravity", -1.0, "must not be less than 0"),
    ])
    def test_out_of_range(self, field, value, message):
        with pytest.raises(RangeError, match=message) as excinfo:
            DiagramConfig(**{field: value})
        assert field in str(excinfo.value)

    def test_unknown_choices(self):
        with pytest.raises(UnknownLayoutError):
            DiagramConfig(layout_algorithm="spring")
        with pytest.raises(UnknownPaletteIdentifierError):
            DiagramConfig(palette_family="rainbow")

    def test_algorithm_specific_options(self):
        DiagramConfig(layout_algorithm="force_atlas", inertia=0.5, speed=2.0)
        DiagramConfig(layout_algorithm="force_atlas2", jitter_tolerance=0.5)
        with pytest.raises(ConflictingOptionError):
            DiagramConfig(layout_algorithm="force_atlas", jitter_tolerance=0.5)
        with pytest.raises(ConflictingOptionError):
            DiagramConfig(layout_algorithm="force_atlas2", inertia=0.5)

    def test_palette_defaults_come_from_palettes(self):
        assert DEFAULT_CONFIG.palette_source is DEFAULT_SOURCE
        assert DEFAULT_CONFIG.palette_family is DEFAULT_FAMILY

    def test_to_dict_is_plain(self):
        d = DEFAULT_CONFIG.to_dict()
        assert d["layout_algorithm"] == "force_atlas2"
        assert d["palette_source"] == "builtin"
        assert d["degree_filter_iterations"] == 4
        assert isinstance(d["style"], dict)


class TestRuntimeConfig:

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("FORCE_DIAGRAM_ENABLE_LOGGING", "false")
        monkeypatch.setenv("FORCE_DIAGRAM_LOG_LEVEL", "debug")
        monkeypatch.setenv("FORCE_DIAGRAM_WRITE_METADATA", "0")
        cfg = load_config()
        assert cfg.enable_logging is False
        assert cfg.log_level == "DEBUG"
        assert cfg.write_metadata is False

    def test_defaults(self, monkeypatch):
        for name in ("FORCE_DIAGRAM_ENABLE_LOGGING", "FORCE_DIAGRAM_LOG_LEVEL",
                     "FORCE_DIAGRAM_WRITE_METADATA"):
            monkeypatch.delenv(name, raising=False)
        assert load_config() == RuntimeConfig()

    def test_configure_logging_disabled(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        configure_logging(RuntimeConfig(enable_logging=False))
        assert calls == []
        configure_logging(RuntimeConfig(log_level="WARNING"))
        assert calls[0]["level"] == logging.WARNING
