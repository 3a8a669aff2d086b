"""On-call role definitions."""
from enum import Enum


class Role(str, Enum):
    """Roles staffed on every on-call shift."""
    PRIMARY = "primary"
    SECONDARY = "secondary"

    @property
    def label(self) -> str:
        """Display label used in schedule listings."""
        return self.value.capitalize()

    @classmethod
    def from_string(cls, s: str) -> "Role":
        """Parse role from various string formats."""
        mapping = {
            "p": cls.PRIMARY, "primary": cls.PRIMARY, "prim": cls.PRIMARY,
            "s": cls.SECONDARY, "secondary": cls.SECONDARY, "sec": cls.SECONDARY,
        }
        key = str(s).strip().lower()
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown role: {s!r}")


# Order in which roles are reported for every shift
ROLES = [Role.PRIMARY, Role.SECONDARY]
