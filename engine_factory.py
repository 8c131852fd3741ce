from rule_engine import RuleEngine

from mock_not_stub_rule import MockNotStubRule


def build_rules():
    return [MockNotStubRule()]


def build_engine():
    return RuleEngine(build_rules())
