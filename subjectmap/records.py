"""
Читання та запис MARC записів (бінарний MARC21 або MARCXML, за розширенням файлу).
"""
import logging
from io import BytesIO

import pymarc
from pymarc import MARCReader, XMLWriter, parse_xml_to_array

logger = logging.getLogger("SubjectMap-Records")

XML_EXTENSIONS = ('.xml', '.marcxml')


def is_xml_path(path):
    return str(path).lower().endswith(XML_EXTENSIONS)


def read_records(path):
    """Генератор записів з файлу. Пошкоджені записи пропускаються з попередженням."""
    if is_xml_path(path):
        yield from parse_xml_to_array(str(path))
        return

    with open(path, 'rb') as fh:
        reader = MARCReader(fh, to_unicode=True, force_utf8=True)
        for position, record in enumerate(reader, start=1):
            if record is None:
                logger.warning(f"⚠️ Skipping unreadable record #{position} in {path}: {reader.current_exception}")
                continue
            yield record


def write_records(path, records):
    """Записує записи у файл, повертає кількість записаних."""
    count = 0
    if is_xml_path(path):
        with open(path, 'wb') as fh:
            writer = XMLWriter(fh)
            for record in records:
                writer.write(record)
                count += 1
            writer.close(close_fh=False)
    else:
        with open(path, 'wb') as fh:
            for record in records:
                fh.write(record.as_marc())
                count += 1
    return count


def parse_marcxml(xml_string):
    """MARCXML рядок або байти -> список записів pymarc."""
    if isinstance(xml_string, str):
        xml_string = xml_string.encode('utf-8')
    return parse_xml_to_array(BytesIO(xml_string))


def records_to_marcxml(records):
    """Список записів -> MARCXML <collection> у байтах."""
    buffer = BytesIO()
    writer = XMLWriter(buffer)
    for record in records:
        writer.write(record)
    writer.close(close_fh=False)
    return buffer.getvalue()


def record_to_marcxml(record):
    return pymarc.record_to_xml(record, namespace=True)
