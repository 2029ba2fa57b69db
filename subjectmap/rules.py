from .rule import Rule
from .xmlutil import start_tag, end_tag


class RuleTable:
    """
    Таблиця правил з точним пошуком за (field, subfield, original).
    Правил можуть бути тисячі, тому зберігаємо їх у словнику, а не списку.
    Порядок серіалізації - порядок першого додавання ключа; заміна правила
    залишає його на старому місці.
    """

    def __init__(self, rules=None):
        self._rules = {}
        for rule in rules or []:
            self.add(rule)

    def add(self, rule):
        if not isinstance(rule, Rule):
            raise TypeError("must supply Rule object")
        self._rules[rule.key] = rule

    def get(self, field, subfield, original):
        return self._rules.get((field, subfield, original))

    def to_xml(self, write):
        """
        Записує блок <rules>. Таблиця може бути великою, тому пишемо
        правило за правилом через функцію write, а не збираємо рядок.
        """
        write(start_tag("rules") + "\n\n")
        for rule in self._rules.values():
            write(rule.to_xml() + "\n")
        write(end_tag("rules") + "\n")

    def __iter__(self):
        return iter(self._rules.values())

    def __len__(self):
        return len(self._rules)

    def __contains__(self, rule):
        return isinstance(rule, Rule) and self._rules.get(rule.key) == rule

    def __eq__(self, other):
        if not isinstance(other, RuleTable):
            return NotImplemented
        return self._rules == other._rules
