class FormatError(Exception):
    """Raised when register wire text is not exactly 14 decimal digits."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(text, reason)
        self.text = text
        self.reason = reason

    def __str__(self) -> str:
        return f'[ERROR] malformed register {self.text!r}: {self.reason}'
