class DecodeError(ValueError):
    """An encoded polyline string could not be decoded."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at offset {position})")
        self.position = position


class InvalidCoordinate(ValueError):
    """A latitude or longitude lies outside its valid range."""

    def __init__(self, field: str, value: float, low: float, high: float):
        super().__init__(f"{field} {value} is outside [{low}, {high}]")
        self.field = field
        self.value = value
