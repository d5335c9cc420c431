class MazeError(Exception):
    """Base class for every recoverable error raised by the maze core."""


class InvalidDimensionsError(MazeError, ValueError):
    pass


class OutOfBoundsError(MazeError, IndexError):
    pass


class InvalidCellError(MazeError, IndexError):
    pass


class NonAdjacentLinkError(MazeError, ValueError):
    pass


class UnknownAlgorithmError(MazeError, ValueError):
    pass


class GenerationError(MazeError):
    pass


class GenerationLimitExceededError(GenerationError):
    def __init__(self, algorithm: str, step_limit: int):
        super().__init__(f"{algorithm} exceeded its step limit of {step_limit}")
        self.algorithm = algorithm
        self.step_limit = step_limit


class UnsupportedGridError(GenerationError):
    pass


class UnreachedTargetError(MazeError, LookupError):
    pass
