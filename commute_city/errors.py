class CityError(Exception):
    """Base class for every fault raised while building or running a city."""


class ConfigError(CityError):
    pass


class SamplingError(CityError):
    """Rejection sampling could not satisfy the density constraint."""


class GraphError(CityError):
    pass


class LayoutError(CityError):
    pass


class RosterError(CityError):
    pass


class SchedulerError(CityError):
    pass


class CommuteStalledError(SchedulerError):
    """A commuting phase outlived its tick allowance."""
