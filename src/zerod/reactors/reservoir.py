from zerod.reactors.reactor import ReactorBase


class Reservoir(ReactorBase):
    """
    Reactor with a fixed state, used as a source or sink of flow devices and
    as the fixed side of walls. It has no equations and is not part of the
    network state vector.
    """

    def __str__(self) -> str:
        return f"Reservoir {self.name}: T = {self.temperature:.2f} K, P = {self.pressure:.1f} Pa\n"
