"""Exceptions raised by pgpartition."""


class InvalidPartitionCount(ValueError):
    """Raised when a partition count (modulus) is not a positive integer.

    Attributes:
        num_partitions: The offending value
    """

    def __init__(self, num_partitions):
        self.num_partitions = num_partitions
        super().__init__(f"Number of partitions must be positive, got {num_partitions}")


def check_num_partitions(num_partitions: int) -> int:
    """Return ``num_partitions`` unchanged, or raise InvalidPartitionCount if <= 0."""
    if num_partitions <= 0:
        raise InvalidPartitionCount(num_partitions)
    return num_partitions
