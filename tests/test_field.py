"""
Tests for FieldSpec: which subfields are copied and which are translated.
"""

import pytest

from subjectmap.errors import ConflictError, SubjectMapError
from subjectmap.field import FieldSpec


class TestFieldSpec:

    def test_empty_by_default(self):
        spec = FieldSpec('650')
        assert spec.tag == '650'
        assert spec.translate() == []
        assert spec.copy() == []

    def test_add_keeps_order(self):
        spec = FieldSpec('650')
        spec.add_translate('z')
        spec.add_translate('a')
        spec.add_copy('d')
        spec.add_copy('c')
        assert spec.translate() == ['z', 'a']
        assert spec.copy() == ['d', 'c']

    def test_prepopulated(self):
        spec = FieldSpec('600', translate=['f', 'g'], copy=['w', 'o'])
        assert spec.translate() == ['f', 'g']
        assert spec.copy() == ['w', 'o']

    def test_empty_code_is_ignored(self):
        spec = FieldSpec('650')
        spec.add_translate(None)
        spec.add_copy('')
        assert spec.translate() == []
        assert spec.copy() == []

    def test_translate_after_copy_conflicts(self):
        spec = FieldSpec('650', copy=['a'])
        with pytest.raises(ConflictError):
            spec.add_translate('a')
        assert spec.translate() == []
        assert spec.copy() == ['a']

    def test_copy_after_translate_conflicts(self):
        spec = FieldSpec('650', translate=['a', 'b'])
        with pytest.raises(ConflictError):
            spec.add_copy('b')
        assert spec.translate() == ['a', 'b']
        assert spec.copy() == []

    def test_conflict_in_constructor(self):
        with pytest.raises(SubjectMapError):
            FieldSpec('650', translate=['a'], copy=['a'])

    def test_snapshots_are_independent(self):
        spec = FieldSpec('650', translate=['a'])
        snapshot = spec.translate()
        snapshot.append('b')
        assert spec.translate() == ['a']

    def test_to_xml_lists_copy_before_translate(self):
        spec = FieldSpec('650', translate=['a', 'z'], copy=['c', 'd'])
        assert spec.to_xml() == (
            '<field tag="650">\n'
            '<copy>c</copy>\n'
            '<copy>d</copy>\n'
            '<translate>a</translate>\n'
            '<translate>z</translate>\n'
            '</field>\n'
        )

    def test_equality(self):
        assert FieldSpec('650', translate=['a']) == FieldSpec('650', translate=['a'])
        assert FieldSpec('650', translate=['a']) != FieldSpec('650', copy=['a'])
