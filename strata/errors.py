"""
Strata - Exceptions

Only programmer/configuration errors are raised. Conditions a caller is
expected to handle (out-of-range reads, rejected edits, unreachable goals)
come back as None or False instead.
"""


class StrataError(Exception):
    """Base class for all terrain errors"""


class ConfigurationError(StrataError):
    """Settings or static data that cannot produce a valid world"""


class TileCatalogError(ConfigurationError):
    """A tile identity has no descriptor"""


class FootprintError(ConfigurationError):
    """A structure placement was asked for a tile without a usable footprint"""


class GenerationError(StrataError):
    """Generation was requested on a terrain that cannot accept it"""
