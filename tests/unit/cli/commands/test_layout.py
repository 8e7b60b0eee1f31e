"""
Unit tests for the 'layout' command.
"""

import json

from techgraph.cli.commands.layout import layout


class TestLayoutCommand:
    def test_layout_full_dataset(self, runner, demo_dir):
        result = runner.invoke(layout, ["-d", str(demo_dir)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["nodes"]) == 8
        assert len(data["edges"]) == 7
        assert data["settled"] is True
        assert data["ticks"] <= 400
        assert data["viewport"] == {"width": 900.0, "height": 600.0}

    def test_layout_with_group_writes_file(self, runner, demo_dir, tmp_path):
        output = tmp_path / "layout.json"

        result = runner.invoke(layout, ["-d", str(demo_dir), "-g", "database", "-o", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert {n["id"] for n in data["nodes"]} == {"PostgreSQL", "Redis"}
        assert data["edges"] == []

    def test_layout_with_search_and_viewport(self, runner, demo_dir):
        result = runner.invoke(layout, ["-d", str(demo_dir), "-s", "container", "--width", "400", "--height", "300"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert {n["id"] for n in data["nodes"]} == {"Docker", "Kubernetes"}
        assert data["viewport"] == {"width": 400.0, "height": 300.0}
        assert data["stats"] == {"nodes": 2, "edges": 1}

    def test_layout_reads_settings(self, runner, demo_dir, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("layout:\n  alpha_min: 0.5\n")

        result = runner.invoke(layout, ["-d", str(demo_dir), "--settings", str(settings)])

        assert result.exit_code == 0
        assert json.loads(result.output)["ticks"] < 50

    def test_layout_invalid_settings(self, runner, demo_dir, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("layout:\n  link_distance: -1\n")

        result = runner.invoke(layout, ["-d", str(demo_dir), "--settings", str(settings)])

        assert result.exit_code == 1
