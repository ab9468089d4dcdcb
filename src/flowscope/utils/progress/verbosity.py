from enum import Enum


class Verbosity(Enum):
    """
    SILENT - Nothing shown
    PROGRESS - One line per chunk (spinner while in flight)
    SUMMARY - Adds run totals and per-chunk record names
    DETAILED - Adds error details for failed chunks
    DEBUG - Adds prompt/response sizes for every provider call
    """

    SILENT = 0
    PROGRESS = 1
    SUMMARY = 2
    DETAILED = 3
    DEBUG = 4

    @classmethod
    def from_input(cls, value):
        """
        Converts various input types to a Verbosity instance.
        """
        if value is False:
            return cls.SILENT
        elif value is True:
            return cls.PROGRESS
        elif isinstance(value, cls):
            return value
        elif isinstance(value, str):
            # -v style flags
            string_map = {
                "": cls.SILENT,
                "v": cls.PROGRESS,
                "vv": cls.SUMMARY,
                "vvv": cls.DETAILED,
                "vvvv": cls.DEBUG,
            }
            if value in string_map:
                return string_map[value]
            if value.upper() in cls.__members__:
                return cls[value.upper()]
            raise ValueError(f"Invalid verbosity: {value}")
        else:
            raise ValueError(f"Invalid verbosity type: {type(value)}")

    def __bool__(self) -> bool:
        return self != Verbosity.SILENT

    def __lt__(self, other):
        if self.__class__ is other.__class__:
            return self.value < other.value
        return NotImplemented

    def __le__(self, other):
        if self.__class__ is other.__class__:
            return self.value <= other.value
        return NotImplemented

    def __gt__(self, other):
        if self.__class__ is other.__class__:
            return self.value > other.value
        return NotImplemented

    def __ge__(self, other):
        if self.__class__ is other.__class__:
            return self.value >= other.value
        return NotImplemented

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Verbosity.{self.name}"
