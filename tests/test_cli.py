import json
import os

import pytest

from force_diagram.cli import build_parser, config_from_args, main
from force_diagram.errors import ConflictingOptionError
from force_diagram.presets import ColorMode, LayoutAlgorithm
from force_diagram.palettes import PaletteFamily, PaletteSource


BASE = ["-gml", "in.gml", "-png", "out.png"]


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(BASE)
        cfg = config_from_args(args)
        assert cfg.layout_algorithm is LayoutAlgorithm.FORCE_ATLAS2
        assert cfg.layout_time == 60
        assert cfg.figure_width == cfg.figure_height == 4096
        assert cfg.edge_opacity == 10.0
        assert cfg.label_percentile == 98.0
        assert cfg.node_color_type is ColorMode.PARTITION
        assert cfg.palette_source is PaletteSource.BUILTIN
        assert cfg.palette_family is PaletteFamily.QUALITATIVE
        assert cfg.num_colors == 9
        assert cfg.jitter_tolerance is None and cfg.inertia is None

    def test_short_and_long_flags(self):
        args = build_parser().parse_args(
            BASE + ["-df", "3", "--label_percentile", "75.5", "-cps", "colorbrewer",
                    "-cpt", "diverging", "-nct", "ranking", "-ladj"]
        )
        cfg = config_from_args(args)
        assert cfg.degree_filter == 3
        assert cfg.label_percentile == 75.5
        assert cfg.palette_source is PaletteSource.COLORBREWER
        assert cfg.palette_family is PaletteFamily.DIVERGING
        assert cfg.node_color_type is ColorMode.RANKING
        assert cfg.label_adjust is True

    def test_legacy_palette_source(self):
        args = build_parser().parse_args(BASE + ["-cps", "GEPHI"])
        assert config_from_args(args).palette_source is PaletteSource.BUILTIN

    def test_conflicting_option_for_force_atlas(self):
        args = build_parser().parse_args(BASE + ["-la", "force_atlas", "-jt", "2"])
        with pytest.raises(ConflictingOptionError, match="jitter_tolerance"):
            config_from_args(args)

    def test_conflicting_option_for_force_atlas2(self):
        args = build_parser().parse_args(BASE + ["--speed", "2"])
        with pytest.raises(ConflictingOptionError, match="speed"):
            config_from_args(args)


class TestMain:

    @pytest.mark.parametrize("extra", [
        ["--figure_width", "0"],
        ["--edge_opacity", "100.5"],
        ["--label_percentile", "-1"],
        ["--num_colors", "0"],
        ["--degree_filter", "two"],
        ["--layout_algorithm", "spring"],
        ["--color_palette_source", "crayola"],
    ])
    def test_usage_errors_exit_2(self, extra, capsys):
        assert main(BASE + extra) == 2
        assert "error" in capsys.readouterr().err

    def test_missing_required(self):
        assert main(["-gml", "in.gml"]) == 2

    def test_conflict_exits_1_before_io(self, tmp_path, capsys):
        out = tmp_path / "x.png"
        code = main(["-gml", str(tmp_path / "missing.gml"), "-png", str(out),
                     "-la", "force_atlas", "-jt", "2"])
        assert code == 1
        assert "may not be specified" in capsys.readouterr().err
        assert not out.exists()

    def test_missing_input_exits_1(self, tmp_path):
        code = main(["-gml", str(tmp_path / "missing.gml"), "-png", str(tmp_path / "x.png")])
        assert code == 1

    def test_success(self, gml_file, tmp_path, monkeypatch):
        monkeypatch.setenv("FORCE_DIAGRAM_ENABLE_LOGGING", "0")
        out = tmp_path / "d.png"
        code = main([
            "-gml", gml_file, "-png", str(out),
            "-nscol", "float_column", "-ncc", "string_column", "-nlc", "name",
            "-df", "10", "-labpct", "50", "-nc", "8",
            "-t", "0", "-figwd", "200", "-fight", "200",
        ])
        assert code == 0
        assert out.exists()
        with open(os.path.splitext(str(out))[0] + ".meta.json", encoding="utf-8") as f:
            assert json.load(f)["labeled_nodes"] == 50
