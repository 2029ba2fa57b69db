import os
import sys
import logging
from copy import deepcopy
from enum import Enum

from pymarc import Field, Record, Subfield

from .mapping import SubjectMap
from .rules import RuleTable

LOG_FORMAT = '%(asctime)s: %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'

# Друге значення індикатора: 0 - LCSH, 7 - джерело вказане в $2
LCSH_INDICATOR = '0'
SOURCE_INDICATOR = '7'
SOURCE_CODE = '2'


class Outcome(Enum):
    TRANSLATED = "translated"
    SKIPPED = "skipped"
    FAILED = "failed"


def ordinal(n):
    if 10 <= n % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th')
    return f"{n}{suffix}"


class TranslationEngine:
    """
    Застосовує SubjectMap до записів pymarc.
    Діагностика (відсутні правила, переклади, джерела) пишеться в окремий лог:
    файл, потік або stderr за замовчуванням. Лог відкривається в конструкторі
    і закривається в close() / при виході з with-блоку; після закриття
    будь-яке повідомлення в лог піднімає ValueError, як запис у закритий файл.
    Правила читаються з SubjectMap при кожному пошуку, тому set_rules діє одразу.
    """

    def __init__(self, subject_map, log=None):
        if not isinstance(subject_map, SubjectMap):
            raise TypeError("must supply SubjectMap object")
        self.subject_map = subject_map
        self._handler = None
        self._diag = self._open_log(log)

    def _open_log(self, log):
        if log is None:
            handler = logging.StreamHandler(sys.stderr)
        elif isinstance(log, (str, os.PathLike)):
            handler = logging.FileHandler(log, mode='a', encoding='utf-8')
        else:
            handler = logging.StreamHandler(log)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))

        # Приватний логер: не реєструється в logging і не пропагує в root
        diag = logging.Logger("SubjectMap-Diagnostics", logging.INFO)
        diag.addHandler(handler)
        self._handler = handler
        return diag

    def log(self, message):
        if self._handler is None:
            raise ValueError(f"diagnostic log is closed, dropped message: {message}")
        self._diag.info(message)

    @property
    def closed(self):
        return self._handler is None

    @property
    def rules(self):
        """Поточна таблиця правил SubjectMap (порожня, якщо правила не задані)."""
        rules = self.subject_map.rules
        return rules if rules is not None else RuleTable()

    def close(self):
        if self._handler is None:
            return
        self._handler.flush()
        self._diag.removeHandler(self._handler)
        self._handler.close()
        self._handler = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # --- FIELD LEVEL ---

    def resolve_field(self, field):
        """Повертає (Outcome, нове поле або None)."""
        if not isinstance(field, Field):
            raise TypeError("must supply pymarc.Field object to translate_field()")

        if field.is_control_field():
            return Outcome.SKIPPED, None

        # Поля з $2 вже мають джерело (перекладені або не LCSH)
        if any(sf.code == SOURCE_CODE for sf in field.subfields):
            return Outcome.SKIPPED, None

        # Перекладаємо тільки LCSH
        if field.indicator2 != LCSH_INDICATOR:
            return Outcome.SKIPPED, None

        rules = self.rules
        subfields = []
        sources = {}
        for sf in field.subfields:
            rule = rules.get(field.tag, sf.code, sf.value)
            if rule is None:
                self.log(f"no rule for field={field.tag} subfield={sf.code} value={sf.value}")
                return Outcome.FAILED, None

            if not rule.translation:
                self.log(f"missing translation for rule: {rule.describe()}")
                continue

            subfields.append(Subfield(code=sf.code, value=rule.translation))
            if rule.source:
                sources[rule.source] = True
            else:
                self.log(f"missing source for rule: {rule.describe()}")

        if not subfields:
            self.log(f"no translated subfields left for field={field.tag}")
            return Outcome.FAILED, None

        last = subfields[-1]
        if not last.value.endswith(('.', ')')):
            subfields[-1] = Subfield(code=last.code, value=last.value + '.')

        subfields += [Subfield(code=SOURCE_CODE, value=source) for source in sources]

        new_field = Field(
            tag=field.tag,
            indicators=[field.indicator1, SOURCE_INDICATOR],
            subfields=subfields,
        )
        return Outcome.TRANSLATED, new_field

    def translate_field(self, field):
        """Перекладене поле або None, якщо переклад неможливий чи не потрібен."""
        outcome, new_field = self.resolve_field(field)
        return new_field if outcome is Outcome.TRANSLATED else None

    # --- RECORD LEVEL ---

    def translate_record(self, record):
        """
        Повертає копію запису з доданими перекладеними полями,
        або None, якщо жодне поле не вдалося перекласти. Оригінал не змінюється.
        """
        if not isinstance(record, Record):
            raise TypeError("must supply pymarc.Record object to translate_record()")

        control_fields = record.get_fields('001')
        control = control_fields[0].data if control_fields else ''

        translated = []
        for spec in self.subject_map.fields():
            for position, marc_field in enumerate(record.get_fields(spec.tag), start=1):
                outcome, new_field = self.resolve_field(marc_field)
                if outcome is Outcome.TRANSLATED:
                    translated.append(new_field)
                elif outcome is Outcome.FAILED:
                    self.log(f"couldn't translate {ordinal(position)} {spec.tag} in record with 001 {control}")

        if not translated:
            return None

        clone = deepcopy(record)
        for new_field in translated:
            clone.add_grouped_field(new_field)
        return clone
