class BaseRule:
    """
    Contract for rules run by RuleEngine.

    `node_types` limits which nodes reach `matches()`; `apply()` returns
    a list of Offense objects (empty when nothing is wrong).
    """

    name = None
    node_types = frozenset()

    def matches(self, node):
        return getattr(node, "type", None) in self.node_types

    def apply(self, node):
        raise NotImplementedError("apply() must be implemented")

    def finalize(self):
        """
        Optional hook for rules that need a full-tree pass before reporting.
        """
        return []
