from .errors import ConflictError
from .xmlutil import start_tag, end_tag, element


class FieldSpec:
    """
    Опис поля MARC, яке треба переглядати: тег і два списки кодів підполів.
    translate - підполя, значення яких шукаються в таблиці правил.
    copy - підполя, які переносяться без змін.
    Код не може бути одночасно в обох списках.
    """

    def __init__(self, tag=None, translate=None, copy=None):
        self.tag = tag
        self._translate = []
        self._copy = []
        for code in translate or []:
            self.add_translate(code)
        for code in copy or []:
            self.add_copy(code)

    def translate(self):
        return list(self._translate)

    def copy(self):
        return list(self._copy)

    def add_translate(self, code):
        if not code:
            return
        if code in self._copy:
            raise ConflictError(f"can't both translate and copy subfield {code}")
        self._translate.append(code)

    def add_copy(self, code):
        if not code:
            return
        if code in self._translate:
            raise ConflictError(f"can't both copy and translate subfield {code}")
        self._copy.append(code)

    def to_xml(self):
        lines = [start_tag("field", tag=self.tag)]
        lines += [element("copy", code) for code in self._copy]
        lines += [element("translate", code) for code in self._translate]
        lines.append(end_tag("field"))
        return "\n".join(lines) + "\n"

    def __eq__(self, other):
        if not isinstance(other, FieldSpec):
            return NotImplemented
        return (self.tag, self._translate, self._copy) == (other.tag, other._translate, other._copy)

    def __repr__(self):
        return f"FieldSpec(tag={self.tag!r}, translate={self._translate!r}, copy={self._copy!r})"
