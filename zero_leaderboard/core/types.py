"""Type definitions and enums for the leaderboard."""

from enum import Enum


class DataSource(str, Enum):
    """Upstream data source identifiers."""

    BLOCKSCOUT = "blockscout"
    ZERION = "zerion"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        """Human-readable display name."""
        names = {
            self.BLOCKSCOUT: "Block explorer",
            self.ZERION: "Zerion identities",
            self.UNKNOWN: "Unknown",
        }
        return names.get(self, self.value)


# Type aliases for common patterns
BaseUnitAmount = str  # Integer amount in base units, kept as a digit string
Fraction01 = float    # 0-1 scale
Address = str         # 0x-prefixed hex address
