class RuleEngine:
    """
    Applies a collection of rules to a flat list of syntax nodes
    and collects their offenses in source order.
    """

    def __init__(self, rules):
        self.rules = rules

    def run(self, nodes):
        offenses = []

        for node in nodes:
            for rule in self.rules:
                # Check if the rule applies to this node
                if rule.matches(node):
                    offenses.extend(rule.apply(node) or [])

        for rule in self.rules:
            offenses.extend(rule.finalize() or [])

        # sorted() is stable, so ties keep visit order.
        return sorted(
            offenses,
            key=lambda offense: (offense.range.begin_pos, offense.range.end_pos),
        )
