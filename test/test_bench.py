import json

import pytest
from faker import Faker

from generate_example_dataset import generate_operations, write_lines
from redblack.rbtree import RBTree
from simple_bench import gather_records, parse_args, replay, report_results


def test_generate_operations():
    Faker.seed(0)
    operations, expected = generate_operations(Faker(), 10)

    inserts = [op["key"] for op in operations if op["op"] == "insert"]
    removes = [op["key"] for op in operations if op["op"] == "remove"]
    assert len(inserts) == 10
    assert removes == inserts[::2]
    assert expected == sorted(inserts[1::2])


def test_write_and_gather_records(tmp_path):
    path = tmp_path / "operations.jl"
    records = [{"op": "insert", "key": "b"}, {"op": "remove", "key": "a"}]
    write_lines(path, records)

    with open(path, "r") as f:
        assert [json.loads(line) for line in f] == records
    assert gather_records(path) == records


def test_replay():
    tree = RBTree()
    operations = [
        {"op": "insert", "key": "b"},
        {"op": "insert", "key": "a"},
        {"op": "insert", "key": "c"},
        {"op": "remove", "key": "b"},
    ]
    timings = replay(tree, operations)

    assert len(timings["insert"]) == 3
    assert len(timings["search"]) == 3
    assert len(timings["remove"]) == 1
    assert tree.sort() == ("a", "c")


def test_replay_generated_dataset():
    Faker.seed(1)
    operations, expected = generate_operations(Faker(), 100)
    tree = RBTree()
    replay(tree, operations)

    assert list(tree.sort()) == expected
    tree.validate()


def test_report_results():
    report = []
    report_results(report, "insert", [0.5, 0.5, 1.0])

    assert report[0] == "1.50 insert/sec (3 total in 2.00 sec)"
    assert "avg   : 0.6666666666666666" in report
    assert "min   : 0.5" in report
    assert "max   : 1.0" in report

    report = []
    report_results(report, "remove", [])
    assert report == ["no remove operations"]


def test_parse_args():
    args = parse_args(["--validate"])

    assert args.validate
    assert not args.verbose
    assert args.operations == "example_operations.jl"
    assert args.expected == "expected_state.jl"


@pytest.mark.parametrize("op", ["validate", "search", "drop"])
def test_replay_rejects_unknown_operation(op):
    tree = RBTree([1])

    with pytest.raises(ValueError, match="unknown operation"):
        replay(tree, [{"op": op, "key": 1}])

    assert tree.sort() == (1,)
