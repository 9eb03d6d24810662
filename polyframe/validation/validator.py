from collections.abc import Iterable, Sequence

from polyframe.validation.rules import ValidationRule, default_rules


class Validator:
    """
    Runs construction rules in order, fail-fast.

    The first rule to raise stops validation; later rules are not consulted.
    """

    DEFAULT_RULES: tuple[ValidationRule, ...] = default_rules()

    def __init__(self, rules: Iterable[ValidationRule] | None = None) -> None:
        self.rules: tuple[ValidationRule, ...] = (
            self.DEFAULT_RULES if rules is None else tuple(rules)
        )

    def validate(self, entries: Sequence[object], merge_strategy: object) -> None:
        """Check the entries and default strategy against every rule."""
        for rule in self.rules:
            rule.check(entries, merge_strategy)
