"""Tests for the master dataset, its stores and the request workflows."""

import pytest

from sheetmatch import (
    EmptyMasterError,
    HeaderMismatch,
    KeyFieldNotFound,
    MasterDataset,
    MemoryStore,
    Settings,
    TableModel,
    WorkbookStore,
    match_against_master,
    merge_uploads,
)


def _empty(table):
    return table.headers == [] and table.rows == []


@pytest.fixture
def dataset(settings):
    return MasterDataset(MemoryStore(), settings)


class TestImport:
    def test_first_import_takes_headers(self, dataset, master_table):
        result = dataset.import_table(master_table)
        assert result.replaced
        assert result.appended_rows == 3
        assert dataset.snapshot() == master_table
        assert dataset.store.saves == 1

    def test_aligns_and_deduplicates(self, dataset, master_table):
        dataset.import_table(master_table)
        shuffled = TableModel(
            headers=["快递名称", "订单号", "省", "市", "区"],
            rows=[["SF", "A1", "广东", "深圳", "南山"], ["ZTO", "A4", "江苏", "南京", "鼓楼"]],
        )

        result = dataset.import_table(shuffled)

        assert not result.replaced
        assert result.appended_rows == 1
        assert result.duplicate_rows == 1
        assert result.total_rows == 4
        assert dataset.snapshot().rows[-1] == ["A4", "江苏", "南京", "鼓楼", "ZTO"]

    def test_same_upload_twice(self, dataset, master_table):
        dataset.import_table(master_table)
        result = dataset.import_table(master_table)
        assert result.appended_rows == 0
        assert result.total_rows == 3

    def test_header_mismatch_leaves_master_unchanged(self, dataset, master_table):
        dataset.import_table(master_table)
        other = TableModel(headers=["a", "b"], rows=[["1", "2"]])

        with pytest.raises(HeaderMismatch):
            dataset.import_table(other)

        assert dataset.snapshot() == master_table
        assert dataset.store.saves == 1

    def test_renamed_column_is_a_mismatch(self, dataset, master_table):
        dataset.import_table(master_table)
        renamed = TableModel(headers=["订单号", "省", "市", "县", "快递名称"], rows=[["A9", "a", "b", "c", "SF"]])
        with pytest.raises(HeaderMismatch, match="missing '区'"):
            dataset.import_table(renamed)

    def test_drops_incomplete_rows(self, dataset):
        table = TableModel(headers=["a", "b"], rows=[["1", "2"], ["3", ""], ["null", "4"]])
        result = dataset.import_table(table)
        assert result.dropped_incomplete == 2
        assert dataset.snapshot().rows == [["1", "2"]]

    def test_keeps_incomplete_rows_when_disabled(self):
        dataset = MasterDataset(MemoryStore(), Settings(drop_incomplete_rows=False))
        table = TableModel(headers=["a", "b"], rows=[["1", "2"], ["3", ""]])
        assert dataset.import_table(table).total_rows == 2

    def test_master_without_rows_is_replaced(self, master_table):
        store = MemoryStore(TableModel(headers=["old"], rows=[]))
        dataset = MasterDataset(store, Settings())
        result = dataset.import_table(master_table)
        assert result.replaced
        assert dataset.snapshot().headers == master_table.headers

    def test_first_import_keeps_repeated_rows(self, dataset):
        table = TableModel(headers=["a", "b"], rows=[["1", "2"], ["1", "2"], ["3", "4"]])
        result = dataset.import_table(table)
        assert result.replaced
        assert result.duplicate_rows == 0
        assert result.total_rows == 3
        assert dataset.snapshot().rows == [["1", "2"], ["1", "2"], ["3", "4"]]

    def test_import_two_uploads(self, dataset):
        couriers = TableModel(headers=["订单编号", "快递名称"], rows=[["A1", "SF"], ["A2", "YTO"]])
        addresses = TableModel(
            headers=["订单号", "省", "市", "区"],
            rows=[["A2", "广东", "深圳", "福田"], ["A3", "浙江", "杭州", "西湖"]],
        )

        result = dataset.import_uploads(couriers, addresses)

        master = dataset.snapshot()
        assert master.headers == ["订单号", "省", "市", "区", "快递名称"]
        # A3 found no courier and is dropped as incomplete
        assert master.rows == [["A2", "广东", "深圳", "福田", "YTO"]]
        assert result.dropped_incomplete == 1


class TestEditing:
    def test_delete_rows(self, dataset, master_table):
        dataset.import_table(master_table)
        assert dataset.delete_rows([0, 0, 9]) == 1
        assert [r[0] for r in dataset.snapshot().rows] == ["A2", "A3"]

    def test_delete_nothing_does_not_save(self, dataset, master_table):
        dataset.import_table(master_table)
        assert dataset.delete_rows([42]) == 0
        assert dataset.store.saves == 1

    def test_clear(self, dataset, master_table):
        dataset.import_table(master_table)
        dataset.clear()
        assert _empty(dataset.snapshot())
        assert _empty(dataset.store.load())

    def test_search_and_categories(self, dataset, master_table):
        dataset.import_table(master_table)
        assert len(dataset.search("深圳").rows) == 2
        assert len(dataset.search().rows) == 3
        assert dataset.categories() == ["SF", "YTO"]

    def test_snapshot_is_a_copy(self, dataset, master_table):
        dataset.import_table(master_table)
        dataset.snapshot().rows.clear()
        assert len(dataset.snapshot().rows) == 3


class TestMatch:
    def test_match_all_categories(self, dataset, master_table, probe_table):
        dataset.import_table(master_table)
        result = dataset.match(probe_table)

        assert result.table.headers == probe_table.headers + master_table.headers
        assert result.table.rows[0][4:] == master_table.rows[1]
        assert result.table.rows[1][4:] == master_table.rows[2]
        assert result.table.rows[2][4:] == [""] * 5
        assert result.statistics["strict_matches"] == 2

    def test_match_within_category_falls_back(self, dataset, master_table, probe_table):
        dataset.import_table(master_table)
        result = dataset.match(probe_table, category="SF")

        # 福田 only exists for YTO, so the SF row from 南山 is taken on province+city
        assert result.table.rows[0][4:] == master_table.rows[0]
        assert result.statistics["relaxed_matches"] == 1
        assert result.statistics["strict_matches"] == 1

    def test_empty_master(self, dataset, probe_table):
        with pytest.raises(EmptyMasterError):
            dataset.match(probe_table)

    def test_missing_key_in_probe(self, master_table):
        probe = TableModel(headers=["收件人", "省"], rows=[["x", "广东"]])
        with pytest.raises(KeyFieldNotFound) as info:
            match_against_master(master_table, probe, ["省", "市"])
        assert info.value.side == "target"


class TestMergeUploads:
    def test_source_key_column_removed(self):
        first = TableModel(headers=["订单编号", "快递名称"], rows=[["A1", "SF"]])
        second = TableModel(headers=["订单号", "省"], rows=[["A1", "广东"], ["A5", "浙江"]])

        merged = merge_uploads(first, second, "订单.*号")

        assert merged.headers == ["订单号", "省", "快递名称"]
        assert merged.rows == [["A1", "广东", "SF"], ["A5", "浙江", ""]]

    def test_missing_merge_field(self):
        first = TableModel(headers=["快递名称"], rows=[["SF"]])
        second = TableModel(headers=["订单号"], rows=[["A1"]])
        with pytest.raises(KeyFieldNotFound) as info:
            merge_uploads(first, second, "订单.*号")
        assert info.value.side == "source"


class TestWorkbookStore:
    def test_missing_file_loads_empty(self, tmp_path):
        assert _empty(WorkbookStore(tmp_path / "none.xlsx").load())

    def test_persists_between_instances(self, settings, master_table):
        MasterDataset.from_settings(settings).import_table(master_table)
        reopened = MasterDataset.from_settings(settings)
        assert reopened.snapshot() == master_table

    def test_equals_sign_text_is_not_a_formula(self, settings):
        table = TableModel(headers=["id", "note"], rows=[["A1", "=see B"]])
        MasterDataset.from_settings(settings).import_table(table)
        assert MasterDataset.from_settings(settings).snapshot().rows == [["A1", "=see B"]]

    def test_clear_removes_file(self, settings, master_table, tmp_path):
        dataset = MasterDataset.from_settings(settings)
        dataset.import_table(master_table)
        assert (tmp_path / "data.xlsx").exists()
        dataset.clear()
        assert not (tmp_path / "data.xlsx").exists()
        assert _empty(dataset.reload())
