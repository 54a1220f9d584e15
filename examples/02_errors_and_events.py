"""
Error codes, custom messages and change events
"""
from nodestore import ErrorCodes, NodeStore, StoreConfig, StoreError, is_error


def main():
    config = StoreConfig().with_messages({ErrorCodes.NOT_EXISTS: "no such key"})
    store = NodeStore(config)

    # Watch every mutation
    for action in ("create", "set", "update", "delete"):
        store.events.on(action, lambda r: print(f"event: {r.action} {r.curr_node.key}"))

    store.set("/feature/enabled", value="true")

    try:
        store.update("/feature/missing", "x")
    except StoreError as err:
        # Branch on the code, messages can change at runtime
        if is_error(err, ErrorCodes.NOT_EXISTS):
            print(f"error json: {err.json_string()}")

    print(store.stats.to_dict())


if __name__ == "__main__":
    main()
