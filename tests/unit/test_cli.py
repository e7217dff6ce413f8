"""Unit tests for the gmlview CLI."""

import json

import pytest
from typer.testing import CliRunner

from gmlview import __version__
from gmlview.cli import app
from gmlview.watcher import DocumentWatcher

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch, sample_graphml):
    """Temporary working directory holding g.graphml."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "g.graphml").write_text(sample_graphml, encoding="utf-8")
    return tmp_path


class TestCli:

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_layouts(self):
        result = runner.invoke(app, ["layouts"])
        assert result.exit_code == 0
        assert "force-directed" in result.stdout
        assert "layered" in result.stdout


class TestInfo:

    def test_counts(self, workdir):
        result = runner.invoke(app, ["info", "g.graphml"])
        assert result.exit_code == 0
        assert "Nodes" in result.stdout
        assert "directed" in result.stdout
        assert "label" in result.stdout

    def test_missing_file(self, workdir):
        result = runner.invoke(app, ["info", "nope.graphml"])
        assert result.exit_code == 1
        assert "File not found" in result.stdout

    def test_dangling_warning(self, workdir, dangling_graphml):
        (workdir / "d.graphml").write_text(dangling_graphml)
        result = runner.invoke(app, ["info", "d.graphml"])
        assert result.exit_code == 0
        assert "Warning" in result.stdout

    def test_malformed(self, workdir, malformed_graphml):
        (workdir / "bad.graphml").write_text(malformed_graphml)
        result = runner.invoke(app, ["info", "bad.graphml"])
        assert result.exit_code == 1
        assert "XML parse error" in result.stdout


class TestExport:

    def test_png_next_to_document(self, workdir):
        result = runner.invoke(app, ["export", "g.graphml"])
        assert result.exit_code == 0
        assert (workdir / "g.png").read_bytes().startswith(b"\x89PNG")
        assert "nodes: 4" in result.stdout

    def test_mermaid_with_layout_and_selection(self, workdir):
        result = runner.invoke(app, [
            "export", "g.graphml", "--format", "mermaid", "--layout", "grid",
            "--select", "parse", "--out", "g.mmd",
        ])
        assert result.exit_code == 0
        text = (workdir / "g.mmd").read_text(encoding="utf-8")
        assert text.startswith("flowchart LR")
        assert "class n1,n2 selected" in text
        assert "Selected 2 node(s)" in result.stdout

    def test_format_from_config(self, workdir):
        (workdir / "cfg.json").write_text(json.dumps({"export": {"format": "mermaid"}}))
        result = runner.invoke(app, ["export", "g.graphml", "--config", "cfg.json"])
        assert result.exit_code == 0
        assert (workdir / "g.mmd").exists()

    def test_invalid_config(self, workdir):
        (workdir / "cfg.json").write_text("{broken")
        result = runner.invoke(app, ["export", "g.graphml", "-c", "cfg.json"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout

    def test_malformed_document(self, workdir, malformed_graphml):
        (workdir / "bad.graphml").write_text(malformed_graphml)
        result = runner.invoke(app, ["export", "bad.graphml"])
        assert result.exit_code == 1
        assert "Parse error" in result.stdout
        assert not (workdir / "bad.png").exists()


class TestSearch:

    def test_matches(self, workdir):
        result = runner.invoke(app, ["search", "g.graphml", "parse"])
        assert result.exit_code == 0
        assert "parse_a" in result.stdout
        assert "Parse A" in result.stdout

    def test_no_matches(self, workdir):
        result = runner.invoke(app, ["search", "g.graphml", "zzz"])
        assert result.exit_code == 0
        assert "No nodes match" in result.stdout


class TestReveal:

    def test_found(self, workdir):
        result = runner.invoke(app, ["reveal", "g.graphml", "store"])
        assert result.exit_code == 0
        assert "g.graphml:9:11" in result.stdout

    def test_not_found(self, workdir):
        result = runner.invoke(app, ["reveal", "g.graphml", "ghost"])
        assert result.exit_code == 1
        assert 'Could not find id="ghost" in source' in result.stdout


class TestWatch:

    @pytest.fixture
    def queued_saves(self, monkeypatch):
        """Replace the observer loop with one pump over the given texts."""
        def install(*texts):
            def run_once(watcher, poll_interval=0.5):
                for text in texts:
                    watcher.updates.put(text)
                watcher.pump()

            monkeypatch.setattr(DocumentWatcher, "run_forever", run_once)
        return install

    def test_bad_save_then_good_save(self, workdir, queued_saves, malformed_graphml, dangling_graphml):
        queued_saves(malformed_graphml, dangling_graphml)
        result = runner.invoke(app, ["watch", "g.graphml", "--format", "mermaid"])

        assert result.exit_code == 0, result.output
        assert "Parse error" in result.stdout
        assert "keeping previous render" in result.stdout
        assert "Reloaded" in result.stdout
        assert "class n1 missing" in (workdir / "g.mmd").read_text(encoding="utf-8")

    def test_consecutive_bad_saves_keep_export(self, workdir, queued_saves, malformed_graphml):
        queued_saves(malformed_graphml, malformed_graphml)
        result = runner.invoke(app, ["watch", "g.graphml", "-f", "mermaid", "-o", "live.mmd"])

        assert result.exit_code == 0, result.output
        assert result.stdout.count("keeping previous render") == 2
        assert 'n0["Ingest"]' in (workdir / "live.mmd").read_text(encoding="utf-8")

    def test_malformed_initial_document(self, workdir, malformed_graphml):
        (workdir / "bad.graphml").write_text(malformed_graphml)
        result = runner.invoke(app, ["watch", "bad.graphml", "--layout", "grid"])
        assert result.exit_code == 1
        assert "Parse error" in result.stdout
