class SubjectMapError(Exception):
    """Базовий клас для помилок subject map."""


class ConflictError(SubjectMapError):
    """Код підполя одночасно у списках copy та translate одного поля."""


class ConfigError(SubjectMapError):
    """Конфігурацію неможливо прочитати або вона некоректна."""

    def __init__(self, source, cause):
        self.source = source
        self.cause = cause
        super().__init__(f"invalid configuration file: {source}: {cause}")
