from typing import Optional


class FraudModelError(Exception):
    """Base class for every fatal error raised by the training script."""


class ConfigurationError(FraudModelError):
    def __init__(self, parameter: str, value, reason: str):
        self.parameter = parameter
        self.value = value
        super().__init__(f"Invalid {parameter}={value!r}: {reason}")


class DataFormatError(FraudModelError):
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[str] = None):
        self.line = line
        self.column = column
        where = []
        if line is not None:
            where.append(f"line {line}")
        if column is not None:
            where.append(f"column {column}")
        prefix = f"{', '.join(where)}: " if where else ""
        super().__init__(prefix + message)


class TrainingError(FraudModelError):
    pass


class EvaluationError(FraudModelError):
    pass
