class CodecException(ValueError):
    """
    Base class for every error raised while encoding or decoding community codes.
    """


class InvalidInput(CodecException):
    """
    An encoder received a value it cannot place on the number line (NaN, infinity
    or something that is not a number at all).
    """


class MalformedCode(CodecException):
    """
    A decoder received something that is not a 9-digit non-negative integer.
    """


class UnclassifiableCode(CodecException):
    """
    A 9-digit code that falls in none of the latitude, longitude or altitude ranges.
    """

    def __init__(self, code: int):
        self.code = code
        super().__init__(
            f"community code {code} does not fall in the latitude, longitude "
            "or altitude range"
        )
