from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest
import yaml

from heatmatrix.heatmap import HeatMap
from heatmatrix.io.read import load_request, parse_request
from heatmatrix.io.write import write_summary, write_table


def test_load_request_with_expected_ids(tmp_path: Path) -> None:
    path = tmp_path / "request.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "expected_ids": ["a", "b"],
                "rows": {"a": "0,3|20,7", "b": {0: 1, 20: 2}},
            }
        ),
        encoding="utf-8",
    )

    request = load_request(path)

    assert request.expected_ids == ["a", "b"]
    assert request.rows["a"] == "0,3|20,7"
    assert request.rows["b"] == {0: 1, 20: 2}
    assert request.source_path == str(path)


def test_load_request_reads_json_documents(tmp_path: Path) -> None:
    path = tmp_path / "request.json"
    path.write_text(json.dumps({"expected_ids": ["a"], "rows": {}}), encoding="utf-8")

    assert load_request(path).rows == {}


def test_parse_request_derives_ids_from_time_buckets() -> None:
    request = parse_request(
        {"entity_id": "svc", "time_buckets": [202601010000, 202601010001], "rows": None}
    )

    assert request.expected_ids == ["202601010000_svc", "202601010001_svc"]
    assert request.rows == {}


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"rows": {}}, "either 'expected_ids' or 'time_buckets'"),
        ({"time_buckets": [1]}, "'entity_id' is required"),
        ({"expected_ids": [], "rows": ["a"]}, "must be a mapping"),
        ({"expected_ids": [], "rows": {"a": 3}}, "row 'a' must be"),
    ],
)
def test_parse_request_rejects_invalid_payloads(payload: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        parse_request(payload)


def test_load_request_rejects_non_mapping_document(tmp_path: Path) -> None:
    path = tmp_path / "request.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must contain a mapping"):
        load_request(path)


def _sample_frame() -> pd.DataFrame:
    heat_map = HeatMap()
    heat_map.build_column("a", {"0": 3, "20": 7}, 0)
    heat_map.fix_missing_columns(["a", "b"], 0)
    return heat_map.to_frame()


def test_write_table_csv_keeps_bucket_index(tmp_path: Path) -> None:
    path = write_table(_sample_frame(), tmp_path / "out" / "heatmap.csv", fmt="csv")

    loaded = pd.read_csv(path, index_col="bucket")
    assert list(loaded.index) == ["[0, 20)", "[20, +inf)"]
    assert loaded.loc["[20, +inf)", "a"] == 7
    assert loaded["b"].tolist() == [0, 0]


def test_write_table_json_split_layout(tmp_path: Path) -> None:
    path = write_table(_sample_frame(), tmp_path / "heatmap.json", fmt="json")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["columns"] == ["a", "b"]
    assert data["index"] == ["[0, 20)", "[20, +inf)"]
    assert data["data"] == [[3, 0], [7, 0]]


def test_write_table_rejects_unknown_format(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Unsupported table format"):
        write_table(_sample_frame(), tmp_path / "heatmap.xlsx", fmt="xlsx")


def test_write_summary_is_sorted_json(tmp_path: Path) -> None:
    path = write_summary({"values": [], "buckets": []}, tmp_path / "nested" / "summary.json")

    assert json.loads(path.read_text(encoding="utf-8")) == {"buckets": [], "values": []}


def test_write_table_parquet_round_trips_frame(tmp_path: Path) -> None:
    frame = _sample_frame()
    path = write_table(frame, tmp_path / "heatmap.parquet", fmt="parquet")

    pd.testing.assert_frame_equal(pd.read_parquet(path), frame)
