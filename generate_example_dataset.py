import json
import sys

from faker import Faker


def generate_operations(fake, n):
    """
    Returns `(operations, expected)` where operations inserts `n` unique
    names and then removes every other one, and expected is the sorted list
    of names left over.
    """
    keys = [fake.unique.name() for _ in range(n)]
    operations = [{"op": "insert", "key": key} for key in keys]

    # remove every other key so the benchmark exercises deletion fixups too
    removed = set()
    for i, key in enumerate(keys):
        if i % 2 == 0:
            operations.append({"op": "remove", "key": key})
            removed.add(key)

    expected = sorted(key for key in keys if key not in removed)
    return operations, expected


def write_lines(fpath, records):
    with open(fpath, "wb") as f:
        for record in records:
            data = json.dumps(record) + "\n"
            f.write(data.encode("utf8"))


if __name__ == "__main__":
    fake = Faker()
    n = int(sys.argv[1])
    operations, expected = generate_operations(fake, n)

    write_lines("example_operations.jl", operations)
    write_lines("expected_state.jl", expected)
