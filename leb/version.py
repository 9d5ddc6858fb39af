"""Version information for leb."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Version:
    """Semantic version of the leb package.

    Adapters report their own library versions in semver form; this is the
    version of the runner itself, embedded in JSON results.
    """

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        """Return the semantic version string (e.g., '0.1.0')."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def semver(self) -> tuple[int, int, int]:
        """Return semantic version as tuple (major, minor, patch)."""
        return (self.major, self.minor, self.patch)

    @classmethod
    def parse(cls, value: str) -> "Version":
        """Parse a 'MAJOR.MINOR.PATCH' string.

        Raises:
            ValueError: If the string is not a three-part numeric version.
        """
        parts = value.strip().split(".")
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid semantic version: {value!r}")
        major, minor, patch = (int(p) for p in parts)
        return cls(major=major, minor=minor, patch=patch)


LEB_VERSION = Version(major=0, minor=1, patch=0)
