"""Column types for on-chain quantities"""
from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


class Uint256(TypeDecorator):
    """Unsigned 256-bit integer stored as decimal text.

    BigInteger tops out at 2**63 - 1, below 18-decimal token amounts such as 10e18.
    """
    impl = String(78)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = int(value)
        if value < 0:
            raise ValueError(f"Uint256 cannot store negative value {value}")
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
