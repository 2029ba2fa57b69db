from typing import NamedTuple, Optional

from .xmlutil import start_tag, end_tag, element

ATTRIBUTES = ("field", "subfield", "original", "translation", "source")


class Rule(NamedTuple):
    """
    Одне правило перекладу: (тег, код підполя, оригінал) -> (переклад, джерело).
    Значення незмінне, як і pymarc.Subfield.
    """
    field: str
    subfield: str
    original: str
    translation: Optional[str] = None
    source: Optional[str] = None

    @property
    def key(self):
        """Ключ пошуку в RuleTable."""
        return (self.field, self.subfield, self.original)

    def describe(self):
        # Тільки для діагностики, назад не парситься
        return "; ".join(f"{name}: {getattr(self, name) or ''}" for name in ATTRIBUTES)

    def to_xml(self):
        lines = [
            start_tag("rule", field=self.field, subfield=self.subfield),
            element("original", self.original),
            element("translation", self.translation),
            element("source", self.source),
            end_tag("rule"),
        ]
        return "\n".join(lines) + "\n"
