# Пакетний переклад файлу записів:
# python3 -m subjectmap.batch config.xml records.mrc translated.mrc [log.txt]
#
# Записи, які не вдалося перекласти, переносяться без змін,
# а причини потрапляють у лог діагностики (log.txt або stderr).

import sys
import logging

from .config import setup_logging, SUBJECTMAP_LOG
from .engine import TranslationEngine
from .mapping import SubjectMap
from .records import read_records, write_records

logger = logging.getLogger("SubjectMap-Batch")


class BatchStats:

    def __init__(self):
        self.seen = 0
        self.translated = 0

    @property
    def unchanged(self):
        return self.seen - self.translated

    def __repr__(self):
        return f"BatchStats(seen={self.seen}, translated={self.translated})"


def translate_batch(engine, records, stats=None):
    """
    Генератор: перекладена копія кожного запису або сам запис, якщо перекладати нічого.
    Помилка перекладу одного запису не зупиняє пакет.
    """
    stats = stats if stats is not None else BatchStats()
    for record in records:
        stats.seen += 1
        new = engine.translate_record(record)
        if new is not None:
            stats.translated += 1
            yield new
        else:
            yield record
        if stats.seen % 1000 == 0:
            logger.info(f"   ...processed {stats.seen} records...")


def run(config_path, in_path, out_path, log_path=None):
    subject_map = SubjectMap.from_config(config_path)
    stats = BatchStats()

    logger.info("=" * 40)
    logger.info(f"📚 BATCH STARTED: {in_path} -> {out_path}")
    logger.info("=" * 40)

    with TranslationEngine(subject_map, log=log_path) as engine:
        write_records(out_path, translate_batch(engine, read_records(in_path), stats))

    logger.info(f"🏁 BATCH FINISHED. Records: {stats.seen}, translated: {stats.translated}, "
                f"unchanged: {stats.unchanged}")
    return stats


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) not in (3, 4):
        print("Usage: python3 -m subjectmap.batch CONFIG IN OUT [LOG]")
        return 2
    log_path = argv[3] if len(argv) == 4 else SUBJECTMAP_LOG
    run(argv[0], argv[1], argv[2], log_path)
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
