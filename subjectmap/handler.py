"""
SAX-обробник, який перетворює XML конфігурацію на об'єкт SubjectMap.
Парсинг іде через defusedxml, щоб конфігурація не могла тягнути зовнішні сутності.
"""
import os
import logging
from xml.sax.handler import ContentHandler

import defusedxml.sax

from .errors import ConfigError
from .field import FieldSpec
from .mapping import SubjectMap
from .rule import Rule
from .rules import RuleTable

logger = logging.getLogger("SubjectMap-Config")

TEXT_ELEMENTS = ("copy", "translate", "original", "translation", "source")


class ConfigHandler(ContentHandler):

    def __init__(self):
        super().__init__()
        self.config = SubjectMap()
        self._field = None
        self._rules = None
        self._rule = None
        self._text = None

    def startElement(self, name, attrs):
        if name == "field":
            self._field = FieldSpec(tag=attrs.get("tag"))
        elif name == "rules":
            self._rules = RuleTable()
        elif name == "rule":
            self._rule = {"field": attrs.get("field"), "subfield": attrs.get("subfield")}
        elif name in TEXT_ELEMENTS:
            self._text = []

    def characters(self, content):
        if self._text is not None:
            self._text.append(content)

    def endElement(self, name):
        if name in TEXT_ELEMENTS:
            text = "".join(self._text or [])
            self._text = None
            if name == "copy" and self._field is not None:
                self._field.add_copy(text.strip())
            elif name == "translate" and self._field is not None:
                self._field.add_translate(text.strip())
            elif self._rule is not None:
                # Порожній переклад/джерело означає "відсутнє"
                self._rule[name] = text if text or name == "original" else None
        elif name == "field":
            self.config.add_field(self._field)
            self._field = None
        elif name == "rule":
            self._rules.add(Rule(
                field=self._rule["field"],
                subfield=self._rule["subfield"],
                original=self._rule.get("original", ""),
                translation=self._rule.get("translation"),
                source=self._rule.get("source"),
            ))
            self._rule = None
        elif name == "rules":
            self.config.set_rules(self._rules)


def load_config(source):
    """
    Читає конфігурацію з шляху або потоку.
    Будь-яка помилка загортається в ConfigError з ідентифікатором джерела.
    """
    if isinstance(source, os.PathLike):
        source = os.fspath(source)
    name = source if isinstance(source, str) else getattr(source, "name", repr(source))

    handler = ConfigHandler()
    try:
        defusedxml.sax.parse(source, handler)
    except Exception as e:
        logger.error(f"❌ Config load failed ({name}): {e}")
        raise ConfigError(name, e) from e

    config = handler.config
    rules = config.rules
    logger.info(f"✅ Config loaded from {name}: {len(config.fields())} fields, "
                f"{len(rules) if rules is not None else 0} rules")
    return config
