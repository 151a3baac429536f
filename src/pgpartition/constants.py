"""PostgreSQL hash-partitioning constants."""

# HASH_PARTITION_SEED, the seed PostgreSQL passes to every partition key hash
DEFAULT_SEED = 0x7A5B22367996DCFD

# Offset added to the row hash before reduction by the partition modulus
DEFAULT_MAGIC = 0x4992394D24F64163
