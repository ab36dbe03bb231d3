from enum import Enum


class ChangeType(Enum):
    NO_CHANGE = "no change"
    COLLECT_LIKE_TERMS = "collect like terms"


class Status:
    """
    Result of running a simplification pass on a node.

    `groups` maps nodes (by identity) to the id of the group they belong to:
    the input terms that were collected together and the output node built
    from them share an id. It stands in for tagging the nodes themselves,
    so neither tree is mutated to record the relationship.
    """

    def __init__(self, change_type: ChangeType, old_node, new_node,
                 manual: bool = False, groups: dict = None):
        self.change_type = change_type
        self.old_node = old_node
        self.new_node = new_node
        self.manual = manual
        self.groups = groups or {}

    @classmethod
    def no_change(cls, node) -> "Status":
        return cls(ChangeType.NO_CHANGE, node, node)

    @classmethod
    def node_changed(cls, change_type: ChangeType, old_node, new_node,
                     manual: bool = False, groups: dict = None) -> "Status":
        return cls(change_type, old_node, new_node, manual, groups)

    def has_changed(self) -> bool:
        return self.change_type != ChangeType.NO_CHANGE

    def group_of(self, node):
        """Group id for `node`, or None if it took no part in a group."""
        return self.groups.get(node)

    def nodes_in_group(self, group_id: int) -> list:
        return [node for node, gid in self.groups.items() if gid == group_id]

    def __repr__(self):
        return f"Status({self.change_type.name}, {self.old_node} -> {self.new_node})"
