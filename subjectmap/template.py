"""
Генерація шаблону конфігурації з пакету MARC записів.

Для кожного унікального значення підполя створюється правило-заготовка:
для translate - з порожнім перекладом (заповнюється вручну),
для copy - з перекладом, рівним оригіналу.

Запуск:
    python3 -m subjectmap.template records.mrc config.xml 650ab,600abcd [650xyz]
"""
import sys
import logging

from .config import setup_logging
from .engine import LCSH_INDICATOR, SOURCE_CODE
from .field import FieldSpec
from .mapping import SubjectMap
from .records import read_records
from .rule import Rule
from .rules import RuleTable

logger = logging.getLogger("SubjectMap-Template")


def parse_field_option(option):
    """'650ab' -> ('650', ['a', 'b'])"""
    option = option.strip()
    if len(option) < 3 or not option[:3].isalnum():
        raise ValueError(f"invalid field option: {option!r}")
    return option[:3], list(option[3:])


def build_field_specs(translate_options, copy_options=()):
    """Збирає FieldSpec за тегами, зберігаючи порядок першої появи тегу."""
    specs = {}
    for option, kind in [(o, 'translate') for o in translate_options] + [(o, 'copy') for o in copy_options]:
        tag, codes = parse_field_option(option)
        spec = specs.setdefault(tag, FieldSpec(tag=tag))
        for code in codes:
            if kind == 'translate':
                spec.add_translate(code)
            else:
                spec.add_copy(code)
    return list(specs.values())


def build_template(records, field_specs):
    subject_map = SubjectMap()
    for spec in field_specs:
        subject_map.add_field(spec)

    rules = RuleTable()
    for record in records:
        for spec in field_specs:
            translate = spec.translate()
            copy = spec.copy()
            for field in record.get_fields(spec.tag):
                # Шаблон тільки для полів, які рушій взагалі буде перекладати
                if field.is_control_field() or field.indicator2 != LCSH_INDICATOR:
                    continue
                if any(sf.code == SOURCE_CODE for sf in field.subfields):
                    continue
                for sf in field.subfields:
                    if rules.get(spec.tag, sf.code, sf.value) is not None:
                        continue
                    if sf.code in translate:
                        rules.add(Rule(spec.tag, sf.code, sf.value))
                    elif sf.code in copy:
                        rules.add(Rule(spec.tag, sf.code, sf.value, translation=sf.value))

    subject_map.set_rules(rules)
    logger.info(f"🧩 Template built: {len(field_specs)} fields, {len(rules)} rule templates")
    return subject_map


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) not in (3, 4):
        print("Usage: python3 -m subjectmap.template IN OUT TRANSLATE[,..] [COPY[,..]]")
        return 2

    in_path, out_path = argv[0], argv[1]
    translate_options = [o for o in argv[2].split(',') if o]
    copy_options = [o for o in argv[3].split(',') if o] if len(argv) == 4 else []

    specs = build_field_specs(translate_options, copy_options)
    subject_map = build_template(read_records(in_path), specs)
    subject_map.write_config(out_path)
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
