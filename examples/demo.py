"""sheetmatch -- Quick demo.

Run: python examples/demo.py
"""


def main():
    from sheetmatch import MasterDataset, MemoryStore, Settings, TableModel, parse_grid

    dataset = MasterDataset(MemoryStore(), Settings())

    # 1. Accumulate two uploads into the master
    print("=" * 60)
    print("1. IMPORT")
    print("=" * 60)
    first = parse_grid([
        ["订单号", "省", "市", "区", "快递名称"],
        ["A1", "广东", "深圳", "南山", "SF"],
        ["A2", "广东", "深圳", "福田", "YTO"],
        ["", "", "", "", ""],
    ])
    second = parse_grid([
        ["快递名称", "订单号", "省", "市", "区"],
        ["SF", "A1", "广东", "深圳", "南山"],
        ["SF", "A3", "浙江", "杭州", "西湖"],
    ])
    for upload in (first, second):
        result = dataset.import_table(upload)
        print(f"  New rows: {result.appended_rows}, duplicates: {result.duplicate_rows}, "
              f"master: {result.total_rows}")
    print(f"  Couriers: {dataset.categories()}")
    print()

    # 2. Match recipients against the SF rows of the master
    print("=" * 60)
    print("2. MATCH")
    print("=" * 60)
    probe = TableModel(
        headers=["收件人", "省", "市", "区"],
        rows=[["张三", "广东", "深圳", "福田"], ["李四", "浙江", "杭州", "西湖"]],
    )
    result = dataset.match(probe, category="SF")
    stats = result.statistics
    print(f"  Strict: {stats['strict_matches']}, relaxed: {stats['relaxed_matches']}, "
          f"unmatched: {stats['unmatched']}")
    for row in result.table.rows:
        print(f"    {row}")
    print()

    print("Done! Try the CLI: sheetmatch --data data.xlsx import orders.xlsx")


if __name__ == "__main__":
    main()
