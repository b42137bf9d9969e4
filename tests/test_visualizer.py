import json
import logging
import os

import pytest
from matplotlib import image as mpimg

from force_diagram.config import RuntimeConfig
from force_diagram.errors import ColumnNotFoundError, PaletteNotFoundError
from force_diagram.graph_state import GraphState
from force_diagram.metadata import metadata_path
from force_diagram.presets import DiagramConfig
from force_diagram.visualizer import (
    ForceDiagram,
    build_graph_state,
    layout_graph_state,
    run_force_diagram,
)


def _config(**overrides):
    base = dict(
        node_size_column="float_column",
        node_color_column="string_column",
        node_label_column="name",
        label_percentile=50.0,
        degree_filter=10,
        num_colors=8,
        layout_time=1,
        figure_width=320,
        figure_height=240,
    )
    base.update(overrides)
    return DiagramConfig(**base)


class TestBuildGraphState:

    def test_filter_rank_style(self, core_loaded):
        state = build_graph_state(config=_config(), graph=core_loaded)

        assert state.stats_before.n_nodes == 110
        assert state.stats_after.n_nodes == 100
        assert state.filter_meta["nodes_removed"] == 10
        # cutoff over the 100 remaining nodes (0..99)
        assert state.label_cutoff == pytest.approx(49.5)
        assert len(state.node_styles.labeled) == 50
        assert len(state.palette) == 8
        assert all("viz" in d for _, d in state.G.nodes(data=True))

    def test_palette_resolved_before_graph_is_read(self, tmp_path):
        missing = str(tmp_path / "never-read.gml")
        with pytest.raises(PaletteNotFoundError):
            build_graph_state(missing, config=_config(palette_number=99))

    def test_missing_column(self, core_loaded):
        with pytest.raises(ColumnNotFoundError, match="centrality"):
            build_graph_state(
                config=_config(node_size_column="centrality"), graph=core_loaded
            )
        # nothing was filtered
        assert core_loaded.G.number_of_nodes() == 110

    def test_emit_events(self, core_loaded):
        events = []
        build_graph_state(
            config=_config(), graph=core_loaded,
            emit=lambda kind, payload: events.append((kind, payload)),
        )
        kinds = {k for k, _ in events}
        assert "log" in kinds
        assert any("colors will be reused" in p.get("message", "") for _, p in events)

    def test_failing_emitter_does_not_abort(self, core_loaded):
        def broken(kind, payload):
            raise RuntimeError("listener down")

        state = build_graph_state(config=_config(), graph=core_loaded, emit=broken)
        assert state.node_styles is not None


class TestGraphStateLog:

    def test_log_forwards_fields(self, caplog):
        events = []
        state = GraphState(config=DiagramConfig(), emit=lambda k, p: events.append((k, p)))
        with caplog.at_level(logging.INFO, logger="force_diagram.graph_state"):
            state.log(logging.INFO, "hello", stage="test")
        assert events == [("log", {"message": "hello", "level": "info", "stage": "test"})]
        assert "hello" in caplog.text


class TestLayoutStage:

    def test_label_adjust_recorded(self, core_loaded):
        state = build_graph_state(
            config=_config(label_adjust=True, label_adjust_time=1), graph=core_loaded
        )
        layout_graph_state(state)
        assert len(state.pos2d) == 100
        assert state.meta["layout"]["algorithm"] == "force_atlas2"
        assert "label_adjust" in state.meta["layout"]


class TestEndToEnd:

    def test_png_and_metadata(self, gml_file, tmp_path):
        out = str(tmp_path / "out" / "diagram.png")
        state = run_force_diagram(
            gml_file, out, _config(),
            runtime=RuntimeConfig(write_metadata=True),
        )

        assert os.path.isfile(out)
        img = mpimg.imread(out)
        assert img.shape[:2] == (240, 320)

        with open(metadata_path(out), encoding="utf-8") as f:
            meta = json.load(f)
        assert meta["stats_before"]["n_nodes"] == 110
        assert meta["stats_after"]["n_nodes"] == 100
        assert meta["labeled_nodes"] == 50
        assert meta["config"]["node_color_type"] == "partition"
        assert len(meta["palette"]) == 8
        assert meta["colors_reused"] is True
        assert meta["layout"]["algorithm"] == "force_atlas2"
        assert state.output_path == out

    def test_metadata_can_be_disabled(self, gml_file, tmp_path):
        out = str(tmp_path / "plain.png")
        diagram = ForceDiagram(
            gml_file, out, config=_config(layout_algorithm="force_atlas"),
            runtime=RuntimeConfig(write_metadata=False),
        )
        diagram.run()
        assert os.path.isfile(out)
        assert diagram.metadata_path is None
        assert not os.path.exists(metadata_path(out))

    def test_top_percentile_labels_nothing(self, gml_file, tmp_path):
        out = str(tmp_path / "nolabels.png")
        run_force_diagram(
            gml_file, out, _config(label_percentile=100.0, layout_time=0),
            runtime=RuntimeConfig(),
        )
        with open(metadata_path(out), encoding="utf-8") as f:
            meta = json.load(f)
        assert meta["labeled_nodes"] == 0
        assert meta["label_cutoff"] == 99.0
