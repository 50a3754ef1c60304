from dataclasses import dataclass


# fmt: off
@dataclass(frozen=True)
class ShortURLModel:
    target: str     # Original long URL
    shortcode: str  # Unique short identifier of shortened URL
# fmt: on
