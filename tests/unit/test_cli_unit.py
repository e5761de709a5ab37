"""Unit tests for the command line entry point."""

import json
from datetime import date

import pandas as pd
import pytest
import yaml

from policy_topics.__main__ import build_parser, main, read_dates, read_documents
from policy_topics.config import settings


@pytest.fixture
def input_dir(tmp_path, policy_documents):
    directory = tmp_path / "raw"
    directory.mkdir()
    for doc in policy_documents:
        (directory / f"{doc.doc_id}.txt").write_text(doc.text, encoding="utf-8")
    (directory / "readme.md").write_text("not a statement", encoding="utf-8")
    return directory


@pytest.fixture
def lexicon_csv(tmp_path):
    path = tmp_path / "lexicon.csv"
    path.write_text("word,sentiment\nstrong,positive\nrisks,negative\n", encoding="utf-8")
    return path


class TestReaders:
    """Input files."""

    def test_read_documents_sorted_and_dated(self, input_dir):
        documents = read_documents(input_dir)

        assert [doc.doc_id for doc in documents] == [
            "2021-01-27",
            "2021-03-17",
            "2021-04-28",
            "2021-06-16",
        ]
        assert documents[0].published == date(2021, 1, 27)

    def test_undated_file_name(self, tmp_path):
        (tmp_path / "statement_a.txt").write_text("rates rise", encoding="utf-8")
        assert read_documents(tmp_path)[0].published is None

    def test_missing_input_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_documents(tmp_path / "missing")

    def test_read_dates(self, tmp_path):
        path = tmp_path / "dates.csv"
        path.write_text("document,date\na,2021-02-03\nb,not a date\n", encoding="utf-8")

        assert read_dates(path) == {"a": date(2021, 2, 3)}

    def test_read_dates_missing_column(self, tmp_path):
        path = tmp_path / "dates.csv"
        path.write_text("document,when\na,2021-02-03\n", encoding="utf-8")

        with pytest.raises(ValueError, match="date"):
            read_dates(path)


class TestMain:
    """End-to-end run through main()."""

    def test_parser_path_defaults_unset(self):
        args = build_parser().parse_args([])

        assert (args.input_dir, args.dates, args.lexicon, args.output_dir) == (None, None, None, None)

    def test_main_uses_project_data_paths(self, tmp_path, monkeypatch):
        raw = tmp_path / "data" / "raw"
        raw.mkdir(parents=True)
        (raw / "march.txt").write_text("Inflation rose and inflation expectations rose.", encoding="utf-8")
        (raw / "june.txt").write_text("Inflation eased while employment grew.", encoding="utf-8")
        (tmp_path / "data" / "document_dates.csv").write_text(
            "document,date\nmarch,2021-03-17\njune,2021-06-16\n", encoding="utf-8"
        )
        monkeypatch.setattr(settings.paths, "project_root", tmp_path)

        assert main(["--topics", "2", "--sweeps", "5", "--watch", "inflation"]) == 0

        run_dir, = (tmp_path / "data" / "processed").glob("*_lda_k2")
        with open(run_dir / "run_config.yaml", encoding="utf-8") as f:
            run_config = yaml.safe_load(f)
        assert run_config["input_dir"] == str(raw)
        assert run_config["dates"] == str(tmp_path / "data" / "document_dates.csv")
        assert run_config["lexicon"] is None

        tracking = pd.read_csv(run_dir / "term_tracking.csv", dtype={"document": str})
        assert tracking["document"].tolist() == ["march", "june"]
        assert tracking["count"].tolist() == [2, 1]

    def test_main_writes_run_directory(self, input_dir, lexicon_csv, tmp_path, capsys):
        output_dir = tmp_path / "processed"

        exit_code = main([
            "--input-dir", str(input_dir),
            "--lexicon", str(lexicon_csv),
            "--topics", "2",
            "--sweeps", "20",
            "--seed", "5",
            "--watch", "inflation",
            "--output-dir", str(output_dir),
        ])

        assert exit_code == 0
        runs = list(output_dir.glob("*_lda_k2"))
        assert len(runs) == 1

        run_dir = runs[0]
        for name in ("run_config.yaml", "run_info.json", "model_info.json", "sentiment.csv",
                     "term_tracking.csv", "document_topics.csv"):
            assert (run_dir / name).exists()

        with open(run_dir / "run_info.json", encoding="utf-8") as f:
            run_info = json.load(f)
        assert run_info["num_documents"] == 4
        assert run_info["sweeps_completed"] == 20
        assert "package_versions" in run_info

        assert "Topic 0:" in capsys.readouterr().out

    def test_main_missing_lexicon(self, input_dir, tmp_path):
        with pytest.raises(FileNotFoundError):
            main([
                "--input-dir", str(input_dir),
                "--lexicon", str(tmp_path / "missing.csv"),
                "--output-dir", str(tmp_path / "processed"),
            ])
