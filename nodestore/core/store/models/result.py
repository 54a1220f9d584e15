"""Operation result returned by every store call."""
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .node import Node


class Action:
    """Action verbs recorded on a Result."""
    GET = 'get'
    SET = 'set'
    UPDATE = 'update'
    CREATE = 'create'
    DELETE = 'delete'


ACTIONS = (Action.GET, Action.SET, Action.UPDATE, Action.CREATE, Action.DELETE)


@dataclass
class Result:
    """
    Outcome of one store operation.

    Attributes:
        action: One of ACTIONS
        curr_node: Node state after the operation (last state for delete)
        prev_node: Node state before the operation, None if there was none

    Both nodes are detached copies, never live tree nodes.
    """
    action: str
    curr_node: Node
    prev_node: Optional[Node] = None

    def __post_init__(self):
        if self.action not in ACTIONS:
            raise ValueError(f"Unknown action: {self.action!r}")
        if self.prev_node is not None and self.prev_node.key != self.curr_node.key:
            raise ValueError(
                f"Snapshot keys differ: {self.curr_node.key!r} != {self.prev_node.key!r}"
            )

    def clone(self) -> 'Result':
        """Deep copy safe to keep after further store mutations."""
        return Result(
            action=self.action,
            curr_node=self.curr_node.clone(),
            prev_node=self.prev_node.clone() if self.prev_node is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'action': self.action,
            'node': self.curr_node.to_dict(),
        }
        if self.prev_node is not None:
            data['prevNode'] = self.prev_node.to_dict()
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
