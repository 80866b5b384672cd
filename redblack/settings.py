# Run a full invariant check (ordering, colours, black height, parent links
# and size) after every insert or remove that changed the tree. Any breakage
# raises `InvariantViolation` straight from the call that caused it.
#
# This turns every modification into an O(n) walk of the whole tree, so it's
# only worth enabling while debugging or when replaying a benchmark dataset
# with `--validate`.
VALIDATE_ON_MUTATION = False
