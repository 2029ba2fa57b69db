"""
Tests for building configuration templates from a batch of records.
"""

import pytest

from subjectmap.errors import ConflictError
from subjectmap.mapping import SubjectMap
from subjectmap.records import write_records
from subjectmap.template import build_field_specs, build_template, main, parse_field_option

from conftest import make_field, make_record


@pytest.fixture
def records():
    return [
        make_record('ocm1',
                    make_field('650', ' ', '0', ('a', 'Cookery'), ('x', 'History'), ('z', 'France')),
                    make_field('650', ' ', '7', ('a', 'Cocina'), ('2', 'bidex'))),
        make_record('ocm2',
                    make_field('650', ' ', '0', ('a', 'Cookery'), ('v', 'Juvenile literature')),
                    make_field('650', ' ', '2', ('a', 'Neoplasms')),
                    make_field('600', '1', '0', ('a', 'Cervantes Saavedra, Miguel de,'), ('d', '1547-1616'))),
    ]


class TestFieldOptions:

    def test_parse_field_option(self):
        assert parse_field_option('650ab') == ('650', ['a', 'b'])
        assert parse_field_option(' 600 ') == ('600', [])

    def test_invalid_option(self):
        with pytest.raises(ValueError):
            parse_field_option('65')

    def test_build_field_specs_merges_tags(self):
        specs = build_field_specs(['650ax', '600a'], ['650z'])
        assert [s.tag for s in specs] == ['650', '600']
        assert specs[0].translate() == ['a', 'x']
        assert specs[0].copy() == ['z']

    def test_conflicting_options(self):
        with pytest.raises(ConflictError):
            build_field_specs(['650a'], ['650a'])


class TestBuildTemplate:

    def test_rule_templates(self, records):
        specs = build_field_specs(['650ax', '600a'], ['650z', '600d'])
        subject_map = build_template(records, specs)
        rules = subject_map.rules

        assert [f.tag for f in subject_map.fields()] == ['650', '600']
        assert rules.get('650', 'a', 'Cookery').translation is None
        assert rules.get('650', 'x', 'History').translation is None
        assert rules.get('650', 'z', 'France').translation == 'France'
        assert rules.get('600', 'd', '1547-1616').translation == '1547-1616'
        assert rules.get('600', 'a', 'Cervantes Saavedra, Miguel de,') is not None

    def test_unique_values_only(self, records):
        rules = build_template(records, build_field_specs(['650a'])).rules
        assert [r.original for r in rules] == ['Cookery']

    def test_ineligible_fields_are_ignored(self, records):
        rules = build_template(records, build_field_specs(['650a'])).rules
        assert rules.get('650', 'a', 'Cocina') is None
        assert rules.get('650', 'a', 'Neoplasms') is None

    def test_unlisted_subfields_are_ignored(self, records):
        rules = build_template(records, build_field_specs(['650a'])).rules
        assert rules.get('650', 'v', 'Juvenile literature') is None


class TestTemplateCommand:

    def test_main_writes_config(self, records, tmp_path):
        in_path = tmp_path / "records.mrc"
        out_path = tmp_path / "config.xml"
        write_records(in_path, records)

        assert main([str(in_path), str(out_path), '650ax', '650z']) == 0

        loaded = SubjectMap.from_config(out_path)
        assert loaded.fields()[0].translate() == ['a', 'x']
        assert loaded.rules.get('650', 'z', 'France').translation == 'France'

    def test_usage(self, capsys):
        assert main([]) == 2
        assert "Usage" in capsys.readouterr().out
