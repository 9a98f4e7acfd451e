"""Tests for the crownscorch command-line interface."""

import joblib
import pandas as pd
import pytest

from crownscorch._version import __version__
from crownscorch.cli import main
from crownscorch.config import MODEL_ENV_VAR
from crownscorch.core.pointcloud import PointCloud
from crownscorch.filters.crown import remove_stem
from crownscorch.io.registry import write

from conftest import make_tree


@pytest.fixture
def tree_file(tmp_path):
    path = tmp_path / "tree_001.laz"
    write(make_tree(n_trunk=1500, n_crown=1500), path)
    return path


@pytest.fixture
def model_file(tmp_path, sklearn_model):
    path = tmp_path / "model.joblib"
    joblib.dump(sklearn_model, path)
    return path


class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestInfo:
    def test_info(self, tree_file, capsys):
        assert main(["info", str(tree_file)]) == 0
        out = capsys.readouterr().out
        assert "Points: 3,000" in out
        assert "Intensity" in out
        assert "Tree height:" in out
        assert "will be calibrated" in out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["info", str(tmp_path / "nope.las")]) == 1
        assert "File not found" in capsys.readouterr().err


class TestHistogram:
    def test_writes_csv(self, tree_file, tmp_path, capsys):
        out_csv = tmp_path / "hist.csv"
        assert main(["histogram", str(tree_file), "-o", str(out_csv)]) == 0
        assert "Wrote 100 bins" in capsys.readouterr().out

        frame = pd.read_csv(out_csv)
        assert list(frame.columns) == ["intensity", "density"]
        assert len(frame) == 100
        assert frame["density"].sum() * 0.2 == pytest.approx(1.0)

    def test_prints_table(self, tree_file, capsys):
        assert main(["histogram", str(tree_file), "--crown-only"]) == 0
        assert "density" in capsys.readouterr().out

    def test_too_few_points(self, tmp_path, sample_pc, capsys):
        path = tmp_path / "tiny.las"
        write(sample_pc.mask(sample_pc["Z"] < 2), path)
        assert main(["histogram", str(path)]) == 1
        assert "Error:" in capsys.readouterr().err


    def test_empty_cloud_exits_1(self, tree_file, monkeypatch, capsys):
        import crownscorch.io.registry

        empty = PointCloud.from_dict({"X": [], "Y": [], "Z": [], "Intensity": []})
        monkeypatch.setattr(crownscorch.io.registry, "read", lambda path: empty)
        assert main(["histogram", str(tree_file)]) == 1
        assert "empty point cloud" in capsys.readouterr().err


class TestPredict:
    def test_predict(self, tree_file, model_file, capsys):
        assert main(["predict", str(tree_file), "-m", str(model_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("tree_001.laz: predicted_scorch=")

    def test_missing_model(self, tree_file, tmp_path, capsys):
        code = main(["predict", str(tree_file), "-m", str(tmp_path / "none.joblib")])
        assert code == 1
        assert "not found" in capsys.readouterr().err

    def test_crown_only_input(self, tree_file, model_file, tmp_path, capsys):
        from crownscorch.io.registry import read

        crown_path = tmp_path / "crown.laz"
        write(remove_stem(read(tree_file)), crown_path)
        assert main(["predict", str(crown_path), "-m", str(model_file), "--crown-only"]) == 0
        assert "predicted_scorch=" in capsys.readouterr().out


class TestBatch:
    def test_batch_csv(self, tmp_path, model_file, capsys):
        trees = tmp_path / "trees"
        trees.mkdir()
        for i in range(2):
            write(make_tree(n_trunk=1500, n_crown=1500, seed=i), trees / f"t{i}.las")

        out_csv = tmp_path / "scorch.csv"
        code = main(["batch", str(trees), "-m", str(model_file), "-o", str(out_csv)])
        assert code == 0
        assert "Predicted 2 trees" in capsys.readouterr().out

        frame = pd.read_csv(out_csv)
        assert list(frame["file"]) == ["t0.las", "t1.las"]
        assert list(frame.columns) == ["file", "predicted_scorch"]

    def test_missing_directory(self, tmp_path, capsys):
        assert main(["batch", str(tmp_path / "nowhere")]) == 1
        assert "Directory not found" in capsys.readouterr().err

    def test_parallel_empty_directory(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv(MODEL_ENV_VAR, str(tmp_path / "missing.joblib"))
        empty = tmp_path / "empty"
        empty.mkdir()
        assert main(["batch", str(empty), "-w", "2"]) == 0
        assert "Predicted 0 trees" in capsys.readouterr().out
