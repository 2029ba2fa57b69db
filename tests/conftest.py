import io

import pytest
from pymarc import Field, Record, Subfield

from subjectmap.engine import TranslationEngine
from subjectmap.field import FieldSpec
from subjectmap.mapping import SubjectMap
from subjectmap.rule import Rule
from subjectmap.rules import RuleTable


def make_field(tag, ind1=' ', ind2='0', *pairs):
    subfields = [Subfield(code=code, value=value) for code, value in pairs]
    return Field(tag=tag, indicators=[ind1, ind2], subfields=subfields)


def make_record(control=None, *fields):
    record = Record()
    if control is not None:
        record.add_field(Field(tag='001', data=control))
    for field in fields:
        record.add_field(field)
    return record


@pytest.fixture
def rule_table():
    return RuleTable([
        Rule('650', 'a', 'World War, 1939-1945', 'Guerra Mundial, 1939-1945', 'bidex'),
        Rule('650', 'x', 'Campaigns', 'Campañas', 'bidex'),
        Rule('650', 'z', 'France', 'Francia', 'lemb'),
        Rule('650', 'a', 'Cookery', 'Cocina', 'bidex'),
        Rule('650', 'x', 'History', 'Historia', None),
        Rule('650', 'v', 'Juvenile literature', None, 'bidex'),
        Rule('650', 'a', 'Trees (Plants)', 'Árboles (Plantas)', 'bidex'),
        Rule('650', 'a', 'Dogs', 'Perros.', 'bidex'),
        Rule('600', 'a', 'Cervantes Saavedra, Miguel de,', 'Cervantes Saavedra, Miguel de,', 'bidex'),
        Rule('600', 'd', '1547-1616', '1547-1616', 'bidex'),
    ])


@pytest.fixture
def subject_map(rule_table):
    subject_map = SubjectMap()
    subject_map.add_field(FieldSpec('650', translate=['a', 'x', 'z', 'v']))
    subject_map.add_field(FieldSpec('600', translate=['a'], copy=['d']))
    subject_map.set_rules(rule_table)
    return subject_map


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def engine(subject_map, log_stream):
    engine = TranslationEngine(subject_map, log=log_stream)
    yield engine
    engine.close()
