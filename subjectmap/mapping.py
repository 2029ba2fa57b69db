"""
Модуль конфігурації мапування предметних рубрик.
SubjectMap містить список полів/підполів, які треба переглядати (FieldSpec),
та таблицю правил перекладу значень (RuleTable).
"""
import io
import logging

from .field import FieldSpec
from .rules import RuleTable
from .xmlutil import PROLOG, start_tag, end_tag

logger = logging.getLogger("SubjectMap")


class SubjectMap:

    def __init__(self):
        self._fields = []
        self._rules = None

    @classmethod
    def from_config(cls, source):
        """Фабрика: SubjectMap з XML конфігурації (шлях або потік). Помилки -> ConfigError."""
        # handler імпортує цей модуль, тому імпорт тут
        from .handler import load_config
        return load_config(source)

    def add_field(self, field):
        if not isinstance(field, FieldSpec):
            raise TypeError("must supply FieldSpec object")
        self._fields.append(field)

    def fields(self):
        return list(self._fields)

    @property
    def rules(self):
        return self._rules

    def set_rules(self, rules):
        """
        Правил може бути тисячі, тому вони живуть в окремому RuleTable.
        Повторний виклик замінює таблицю повністю (без злиття).
        """
        if not isinstance(rules, RuleTable):
            raise TypeError("must supply RuleTable object if setting rules")
        self._rules = rules

    def to_xml(self, fh):
        """Серіалізує конфігурацію у будь-який текстовий або байтовий потік."""
        write = _writer(fh)
        write(PROLOG + "\n")
        write(start_tag("config") + "\n\n")

        write(start_tag("fields") + "\n\n")
        for field in self._fields:
            write(field.to_xml() + "\n")
        write(end_tag("fields") + "\n\n")

        if self._rules is not None:
            self._rules.to_xml(write)

        write("\n" + end_tag("config") + "\n")

    def write_config(self, path):
        with open(path, "w", encoding="utf-8") as fh:
            self.to_xml(fh)
        logger.info(f"💾 Config written to {path}")


def _writer(fh):
    # Байтовим потокам віддаємо UTF-8
    mode = getattr(fh, "mode", "")
    if isinstance(fh, (io.RawIOBase, io.BufferedIOBase)) or (isinstance(mode, str) and "b" in mode):
        return lambda text: fh.write(text.encode("utf-8"))
    return fh.write
