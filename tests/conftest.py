"""Shared test fixtures for sheetmatch."""

import csv

import pytest

from sheetmatch import Settings, TableModel

MASTER_HEADERS = ["订单号", "省", "市", "区", "快递名称"]
MASTER_ROWS = [
    ["A1", "广东", "深圳", "南山", "SF"],
    ["A2", "广东", "深圳", "福田", "YTO"],
    ["A3", "浙江", "杭州", "西湖", "SF"],
]

PROBE_HEADERS = ["收件人", "省", "市", "区"]
PROBE_ROWS = [
    ["张三", "广东", "深圳", "福田"],
    ["李四", "浙江", "杭州", "西湖"],
    ["王五", "江苏", "南京", "鼓楼"],
]


def _write_csv(path, headers, rows):
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(headers)
        writer.writerows(rows)
    return str(path)


@pytest.fixture
def settings(tmp_path):
    """Default field patterns with the master file under tmp_path."""
    return Settings(data_file=str(tmp_path / "data.xlsx"))


@pytest.fixture
def master_table():
    return TableModel(headers=list(MASTER_HEADERS), rows=[list(r) for r in MASTER_ROWS])


@pytest.fixture
def probe_table():
    return TableModel(headers=list(PROBE_HEADERS), rows=[list(r) for r in PROBE_ROWS])


@pytest.fixture
def master_csv(tmp_path):
    """Three complete order rows, two couriers."""
    return _write_csv(tmp_path / "master.csv", MASTER_HEADERS, MASTER_ROWS)


@pytest.fixture
def probe_csv(tmp_path):
    """Recipients to be matched against the master by province/city/district."""
    return _write_csv(tmp_path / "probe.csv", PROBE_HEADERS, PROBE_ROWS)


@pytest.fixture
def shuffled_csv(tmp_path):
    """Same columns as the master in another order: one duplicate, one new row."""
    headers = ["快递名称", "订单号", "省", "市", "区"]
    rows = [
        ["SF", "A1", "广东", "深圳", "南山"],
        ["ZTO", "A4", "江苏", "南京", "鼓楼"],
    ]
    return _write_csv(tmp_path / "shuffled.csv", headers, rows)
