class SplashError(ValueError):
    """Base class for every container/codec failure."""


class HeaderFormatError(SplashError):
    pass


class UnsupportedKind(SplashError):
    pass


class UnexpectedEndOfData(SplashError):
    pass


class SizeMismatch(SplashError):
    pass


class DimensionError(SplashError):
    pass
