"""
Basic usage - create, update, read and delete keys
"""
from nodestore import NodeStore


def main():
    store = NodeStore()

    # Parent directories are created on the way
    store.create("/app/db/host", value="localhost")
    store.create("/app/db/port", value="5432")

    # Every mutation reports the state before and after
    result = store.update("/app/db/port", "6543")
    print(f"{result.action}: {result.prev_node.value} -> {result.curr_node.value}")

    # Directory listing with the whole subtree
    listing = store.get("/app", recursive=True, sorted=True)
    for node in listing.curr_node.iter_subtree():
        print(f"  {node.key}{'/' if node.is_dir else ' = ' + repr(node.value)}")

    # Non-empty directories need recursive=True
    deleted = store.delete("/app", recursive=True)
    print(f"Deleted {deleted.curr_node.key}")


if __name__ == "__main__":
    main()
